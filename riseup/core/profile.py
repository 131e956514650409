from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel

from .models import TrainingVideo


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    earned: bool


def _capitalize(skill: str) -> str:
    return skill[:1].upper() + skill[1:]


def training_skills(videos: Iterable[TrainingVideo]) -> List[str]:
    """Unique skills gained from the given videos, first-seen order, first letter capitalized."""
    seen = set()
    out: List[str] = []
    for video in videos:
        for skill in video.skills_gained:
            if skill in seen:
                continue
            seen.add(skill)
            out.append(_capitalize(skill))
    return out


def achievements(
    completed: int,
    applied: int,
    skills: int,
    catalog_size: int,
) -> List[Achievement]:
    """Profile badges derived from completed/applied counts and the total skill count."""
    return [
        Achievement(id="1", title="First Steps", description="Completed your first training video",
                    earned=completed >= 1),
        Achievement(id="2", title="Job Seeker", description="Applied to your first job",
                    earned=applied >= 1),
        Achievement(id="3", title="Fast Learner", description="Completed 5+ training videos",
                    earned=completed >= 5),
        Achievement(id="4", title="Skill Builder", description="Gained 10+ new skills",
                    earned=skills >= 10),
        Achievement(id="5", title="Dedicated Learner", description="Complete all training videos",
                    earned=catalog_size > 0 and completed >= catalog_size),
        Achievement(id="6", title="Active Applicant", description="Applied to 5+ jobs",
                    earned=applied >= 5),
    ]
