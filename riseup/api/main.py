from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Depends, Query, HTTPException, Header, Body
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from riseup.api.deps import state_manager
from riseup.config import SETTINGS
from riseup.core.keys import Role
from riseup.core.models import SavedJob, SavedVideo, TrainingVideo, parse_saved_item
from riseup.core.profile import Achievement
from riseup.core.saved_state import SavedState, SavedStateManager

ADMIN_TOKEN = SETTINGS.admin_token

def require_admin(x_token: str | None) -> None:
    if not ADMIN_TOKEN or x_token != ADMIN_TOKEN:
        raise HTTPException(status_code=401, detail="Unauthorized")


# -------------------------
# FastAPI setup
# -------------------------
app = FastAPI(title="RiseUp Saved State API", version="0.1.0")
LOGGER = logging.getLogger(__name__)

# CORS (open for now; the mobile client calls from arbitrary origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------
# Pydantic response models
# -------------------------
class StateOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str
    saved_jobs: List[SavedJob] = Field(alias="savedJobs")
    saved_videos: List[SavedVideo] = Field(alias="savedVideos")
    completed_videos: List[str] = Field(alias="completedVideos")
    applied_jobs: List[str] = Field(alias="appliedJobs")


class ProfileOut(BaseModel):
    role: str
    skills: List[str]
    achievements: List[Achievement]


def _state_out(state: SavedState) -> StateOut:
    return StateOut(
        role=state.role,
        saved_jobs=state.saved_jobs,
        saved_videos=state.saved_videos,
        completed_videos=state.completed_videos,
        applied_jobs=state.applied_jobs,
    )


# -------------------------
# Routes
# -------------------------
@app.get("/", tags=["meta"])
async def root():
    return {"message": "RiseUp saved-state API is running"}


@app.get("/healthz", tags=["meta"])
async def healthz():
    return {"status": "ok"}


@app.get("/training", response_model=List[TrainingVideo], tags=["catalog"])
async def get_training(manager: SavedStateManager = Depends(state_manager)):
    return list(manager.catalog)


@app.get("/state/{role}", response_model=StateOut, tags=["state"])
async def get_state(role: Role, manager: SavedStateManager = Depends(state_manager)):
    return _state_out(manager.context(role))


@app.post("/state/{role}/saved", response_model=StateOut, tags=["state"])
async def save_item(
    role: Role,
    payload: Dict[str, Any] = Body(...),
    manager: SavedStateManager = Depends(state_manager),
):
    """Save a job or a video; the record's ``kind`` picks the collection."""
    try:
        item = parse_saved_item(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    if isinstance(item, SavedJob):
        manager.save_job(role, item)
    else:
        manager.save_video(role, item)
    return _state_out(manager.context(role))


@app.delete("/state/{role}/saved/jobs/{job_id}", response_model=StateOut, tags=["state"])
async def unsave_job(role: Role, job_id: str, manager: SavedStateManager = Depends(state_manager)):
    manager.unsave_job(role, job_id)
    return _state_out(manager.context(role))


@app.delete("/state/{role}/saved/videos/{video_id}", response_model=StateOut, tags=["state"])
async def unsave_video(role: Role, video_id: str, manager: SavedStateManager = Depends(state_manager)):
    manager.unsave_video(role, video_id)
    return _state_out(manager.context(role))


@app.post("/state/{role}/completed/{video_id}", response_model=StateOut, tags=["state"])
async def complete_video(role: Role, video_id: str, manager: SavedStateManager = Depends(state_manager)):
    manager.complete_video(role, video_id)
    return _state_out(manager.context(role))


@app.get("/state/{role}/completed", response_model=List[TrainingVideo], tags=["state"])
async def completed_details(role: Role, manager: SavedStateManager = Depends(state_manager)):
    return manager.get_completed_videos_with_details(role)


@app.post("/state/{role}/applied/{job_id}", response_model=StateOut, tags=["state"])
async def apply_to_job(role: Role, job_id: str, manager: SavedStateManager = Depends(state_manager)):
    manager.apply_to_job(role, job_id)
    return _state_out(manager.context(role))


@app.delete("/state/{role}/applied/{job_id}", response_model=StateOut, tags=["state"])
async def withdraw_application(role: Role, job_id: str, manager: SavedStateManager = Depends(state_manager)):
    manager.withdraw_job_application(role, job_id)
    return _state_out(manager.context(role))


@app.delete("/state/{role}/jobs/{job_id}", response_model=StateOut, tags=["state"])
async def drop_job(role: Role, job_id: str, manager: SavedStateManager = Depends(state_manager)):
    """Remove a job from the seeker's lists: withdraw and unsave in one call."""
    manager.drop_job(role, job_id)
    return _state_out(manager.context(role))


@app.get("/state/{role}/profile", response_model=ProfileOut, tags=["state"])
async def get_profile(
    role: Role,
    self_taught: int = Query(0, ge=0, description="Number of self-taught skills the user added"),
    manager: SavedStateManager = Depends(state_manager),
):
    state = manager.context(role)
    return ProfileOut(
        role=role,
        skills=state.training_skills(),
        achievements=state.achievements(self_taught_skills=self_taught),
    )


@app.delete("/state/{role}", tags=["admin"])
async def clear_state(
    role: Role,
    x_token: str | None = Header(default=None),
    manager: SavedStateManager = Depends(state_manager),
):
    require_admin(x_token)
    cleared = manager.clear(role)
    LOGGER.info("cleared persisted state role=%s ok=%s", role, cleared)
    return {"role": role, "cleared": cleared}
