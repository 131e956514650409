from __future__ import annotations

from typing import Optional

from .models import TrainingVideo

# Shared, read-only training catalog. Order is significant: completed-video
# listings are returned in this order.
TRAINING_CATALOG: tuple[TrainingVideo, ...] = (
    TrainingVideo(
        id="1",
        title="Customer Service Basics",
        category="Customer Service",
        duration="8 min",
        description="Learn how to handle customers professionally",
        skills_gained=("communication", "problem solving", "patience"),
    ),
    TrainingVideo(
        id="2",
        title="Cash Handling Safety",
        category="Customer Service",
        duration="5 min",
        description="Proper cash register and money handling techniques",
        skills_gained=("cash handling", "accuracy", "security"),
    ),
    TrainingVideo(
        id="3",
        title="Safe Driving Tips",
        category="Driving",
        duration="12 min",
        description="Essential safety tips for delivery drivers",
        skills_gained=("driving safety", "navigation", "time management"),
    ),
    TrainingVideo(
        id="4",
        title="Route Planning",
        category="Driving",
        duration="6 min",
        description="How to plan efficient delivery routes",
        skills_gained=("navigation", "efficiency", "planning"),
    ),
    TrainingVideo(
        id="5",
        title="Cleaning Techniques",
        category="Cleaning",
        duration="10 min",
        description="Professional cleaning methods and best practices",
        skills_gained=("attention to detail", "efficiency", "hygiene"),
    ),
    TrainingVideo(
        id="6",
        title="Safety Equipment",
        category="Cleaning",
        duration="7 min",
        description="How to use cleaning equipment safely",
        skills_gained=("safety", "equipment handling", "protocols"),
    ),
    TrainingVideo(
        id="7",
        title="Food Safety Basics",
        category="Food Service",
        duration="9 min",
        description="Essential food safety and hygiene practices",
        skills_gained=("food safety", "hygiene", "regulations"),
    ),
    TrainingVideo(
        id="8",
        title="Warehouse Organization",
        category="Warehouse",
        duration="11 min",
        description="How to organize and manage warehouse inventory",
        skills_gained=("organization", "inventory", "efficiency"),
    ),
)


def find_video(video_id: str, catalog: tuple[TrainingVideo, ...] = TRAINING_CATALOG) -> Optional[TrainingVideo]:
    for video in catalog:
        if video.id == video_id:
            return video
    return None
