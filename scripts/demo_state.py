# scripts/demo_state.py
from __future__ import annotations

import logging

from riseup.core.catalog import TRAINING_CATALOG
from riseup.core.models import saved_job_from_listing, saved_video_from_catalog
from riseup.core.saved_state import SavedStateManager
from riseup.db.models import Base
from riseup.db.session import ENGINE
from riseup.db.store import KeyValueStore


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=ENGINE)
    manager = SavedStateManager(KeyValueStore())

    # Example listing as returned by GET /api/jobs
    listing = {
        "_id": "demo-123",
        "title": "Warehouse Associate",
        "company": "DemoCo",
        "location": "Springfield",
        "minimumSalary": "$16/hour",
        "requiredSkills": ["Basic English", "lifting"],
    }

    manager.save_job("user", saved_job_from_listing(listing))
    manager.save_video("user", saved_video_from_catalog(TRAINING_CATALOG[7]))
    manager.complete_video("user", "8")
    manager.apply_to_job("user", "demo-123")

    state = manager.context("user")
    print(f"Saved jobs: {[j.title for j in state.saved_jobs]}")
    print(f"Completed: {[v.title for v in state.get_completed_videos_with_details()]}")
    print(f"Skills: {state.training_skills()}")
    earned = [a.title for a in state.achievements() if a.earned]
    print(f"Achievements: {earned}")


if __name__ == "__main__":
    main()
