"""Saved / applied / completed state for one role-context at a time.

A :class:`SavedState` mirrors the four persisted collections of a single
role-context. It starts uninitialized; :meth:`SavedState.initialize` loads the
persisted arrays and from then on every mutation that changes a collection
writes that collection back through the storage adapter. Mutations made
before initialization only touch memory, so an empty default can never
overwrite data that has not been loaded yet.

:class:`SavedStateManager` owns the single active :class:`SavedState` and takes
the role-context explicitly on every call. Asking for a different role-context
discards the active state and loads the new one.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError

from . import profile
from .catalog import TRAINING_CATALOG, find_video
from .keys import DATA_KINDS, DataKind, storage_key, validate_role
from .models import SavedJob, SavedVideo, TrainingVideo
from .profile import Achievement

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class Storage(Protocol):
    def store(self, key: str, value: Any) -> bool: ...
    def load(self, key: str) -> Optional[Any]: ...
    def remove(self, key: str) -> bool: ...


def _records_from(raw: Any, model: Type[RecordT], key: str) -> List[RecordT]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        LOGGER.warning("ignoring %s: expected a list, got %s", key, type(raw).__name__)
        return []
    out: List[RecordT] = []
    seen = set()
    for item in raw:
        try:
            record = model.model_validate(item)
        except ValidationError as e:
            LOGGER.warning("skipping malformed entry in %s: %s", key, e.errors()[:1])
            continue
        if record.id in seen:
            continue
        seen.add(record.id)
        out.append(record)
    return out


def _ids_from(raw: Any, key: str) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        LOGGER.warning("ignoring %s: expected a list, got %s", key, type(raw).__name__)
        return []
    out: List[str] = []
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            LOGGER.warning("skipping non-id entry in %s: %r", key, item)
            continue
        value = str(item)
        if value not in out:
            out.append(value)
    return out


class SavedState:
    def __init__(
        self,
        role: str,
        storage: Storage,
        catalog: tuple[TrainingVideo, ...] = TRAINING_CATALOG,
    ) -> None:
        self.role = validate_role(role)
        self._storage = storage
        self._catalog = catalog
        self._saved_jobs: List[SavedJob] = []
        self._saved_videos: List[SavedVideo] = []
        self._completed: List[str] = []
        self._applied: List[str] = []
        self._initialized = False
        self.dropped_writes = 0

    # --- Lifecycle ---
    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Load all four collections for this role-context and start persisting changes."""
        keys = {kind: storage_key(self.role, kind) for kind in DATA_KINDS}
        loaded = {kind: self._storage.load(key) for kind, key in keys.items()}

        self._saved_jobs = _records_from(loaded["savedJobs"], SavedJob, keys["savedJobs"])
        self._saved_videos = _records_from(loaded["savedVideos"], SavedVideo, keys["savedVideos"])
        self._completed = _ids_from(loaded["completedVideos"], keys["completedVideos"])
        self._applied = _ids_from(loaded["appliedJobs"], keys["appliedJobs"])
        self._initialized = True
        LOGGER.debug(
            "loaded role=%s saved_jobs=%s saved_videos=%s completed=%s applied=%s",
            self.role,
            len(self._saved_jobs),
            len(self._saved_videos),
            len(self._completed),
            len(self._applied),
        )

    def _serialized(self, kind: DataKind) -> list:
        if kind == "savedJobs":
            return [j.model_dump(by_alias=True) for j in self._saved_jobs]
        if kind == "savedVideos":
            return [v.model_dump(by_alias=True) for v in self._saved_videos]
        if kind == "completedVideos":
            return list(self._completed)
        return list(self._applied)

    def _commit(self, kind: DataKind) -> None:
        if not self._initialized:
            return
        key = storage_key(self.role, kind)
        if not self._storage.store(key, self._serialized(kind)):
            self.dropped_writes += 1
            LOGGER.warning("write dropped for %s; in-memory state kept", key)

    # --- Collections (copies) ---
    @property
    def saved_jobs(self) -> List[SavedJob]:
        return list(self._saved_jobs)

    @property
    def saved_videos(self) -> List[SavedVideo]:
        return list(self._saved_videos)

    @property
    def completed_videos(self) -> List[str]:
        return list(self._completed)

    @property
    def applied_jobs(self) -> List[str]:
        return list(self._applied)

    def snapshot(self) -> Dict[str, list]:
        """JSON-ready copy of the four collections, keyed like the storage keys."""
        return {kind: self._serialized(kind) for kind in DATA_KINDS}

    # --- Saved jobs ---
    def save_job(self, job: SavedJob) -> None:
        if self.is_job_saved(job.id):
            return
        self._saved_jobs.append(job)
        LOGGER.info("job saved role=%s id=%s title=%r", self.role, job.id, job.title)
        self._commit("savedJobs")

    def unsave_job(self, job_id: str) -> None:
        kept = [j for j in self._saved_jobs if j.id != job_id]
        if len(kept) == len(self._saved_jobs):
            return
        self._saved_jobs = kept
        LOGGER.info("job unsaved role=%s id=%s", self.role, job_id)
        self._commit("savedJobs")

    def is_job_saved(self, job_id: str) -> bool:
        return any(j.id == job_id for j in self._saved_jobs)

    def toggle_saved_job(self, job: SavedJob) -> bool:
        """Save ``job`` if it is not saved yet, otherwise unsave it. Returns the new flag."""
        if self.is_job_saved(job.id):
            self.unsave_job(job.id)
            return False
        self.save_job(job)
        return True

    # --- Saved videos ---
    def save_video(self, video: SavedVideo) -> None:
        if self.is_video_saved(video.id):
            return
        self._saved_videos.append(video)
        LOGGER.info("video saved role=%s id=%s title=%r", self.role, video.id, video.title)
        self._commit("savedVideos")

    def unsave_video(self, video_id: str) -> None:
        kept = [v for v in self._saved_videos if v.id != video_id]
        if len(kept) == len(self._saved_videos):
            return
        self._saved_videos = kept
        LOGGER.info("video unsaved role=%s id=%s", self.role, video_id)
        self._commit("savedVideos")

    def is_video_saved(self, video_id: str) -> bool:
        return any(v.id == video_id for v in self._saved_videos)

    def toggle_saved_video(self, video: SavedVideo) -> bool:
        if self.is_video_saved(video.id):
            self.unsave_video(video.id)
            return False
        self.save_video(video)
        return True

    # --- Training completion (never undone) ---
    def complete_video(self, video_id: str) -> None:
        if video_id in self._completed:
            return
        self._completed.append(video_id)
        video = find_video(video_id, self._catalog)
        LOGGER.info("video completed role=%s %s", self.role, video.title if video else video_id)
        self._commit("completedVideos")

    def is_video_completed(self, video_id: str) -> bool:
        return video_id in self._completed

    def get_completed_videos_with_details(self) -> List[TrainingVideo]:
        """Catalog entries for completed ids, in catalog order; unknown ids are dropped."""
        completed = set(self._completed)
        return [v for v in self._catalog if v.id in completed]

    # --- Applications ---
    def apply_to_job(self, job_id: str) -> None:
        if job_id in self._applied:
            return
        self._applied.append(job_id)
        LOGGER.info("applied role=%s id=%s", self.role, job_id)
        self._commit("appliedJobs")

    def withdraw_job_application(self, job_id: str) -> None:
        if job_id not in self._applied:
            return
        self._applied = [i for i in self._applied if i != job_id]
        LOGGER.info("application withdrawn role=%s id=%s", self.role, job_id)
        self._commit("appliedJobs")

    def is_job_applied(self, job_id: str) -> bool:
        return job_id in self._applied

    def drop_job(self, job_id: str) -> None:
        """Withdraw any application and unsave the job."""
        self.withdraw_job_application(job_id)
        self.unsave_job(job_id)

    # --- Profile ---
    def training_skills(self) -> List[str]:
        return profile.training_skills(self.get_completed_videos_with_details())

    def achievements(self, self_taught_skills: int = 0) -> List[Achievement]:
        return profile.achievements(
            completed=len(self._completed),
            applied=len(self._applied),
            skills=len(self.training_skills()) + self_taught_skills,
            catalog_size=len(self._catalog),
        )


def clear_role_data(storage: Storage, role: str) -> bool:
    """Remove every persisted collection of ``role``. False if any removal failed."""
    removed = [storage.remove(storage_key(role, kind)) for kind in DATA_KINDS]
    return all(removed)


class SavedStateManager:
    """Holds the one active :class:`SavedState` and routes role-scoped calls to it."""

    def __init__(
        self,
        storage: Storage,
        catalog: tuple[TrainingVideo, ...] = TRAINING_CATALOG,
    ) -> None:
        self._storage = storage
        self._catalog = catalog
        self._active: Optional[SavedState] = None

    @property
    def catalog(self) -> tuple[TrainingVideo, ...]:
        return self._catalog

    @property
    def active_role(self) -> Optional[str]:
        return self._active.role if self._active is not None else None

    def context(self, role: str) -> SavedState:
        """Return the initialized state for ``role``, replacing the active one on a role change."""
        validate_role(role)
        if self._active is None or self._active.role != role:
            if self._active is not None:
                LOGGER.info("role-context change %s -> %s", self._active.role, role)
            state = SavedState(role, self._storage, self._catalog)
            state.initialize()
            self._active = state
        return self._active

    def clear(self, role: str) -> bool:
        cleared = clear_role_data(self._storage, validate_role(role))
        if self._active is not None and self._active.role == role:
            self._active = None
        return cleared

    def save_job(self, role: str, job: SavedJob) -> None:
        self.context(role).save_job(job)

    def unsave_job(self, role: str, job_id: str) -> None:
        self.context(role).unsave_job(job_id)

    def is_job_saved(self, role: str, job_id: str) -> bool:
        return self.context(role).is_job_saved(job_id)

    def toggle_saved_job(self, role: str, job: SavedJob) -> bool:
        return self.context(role).toggle_saved_job(job)

    def save_video(self, role: str, video: SavedVideo) -> None:
        self.context(role).save_video(video)

    def unsave_video(self, role: str, video_id: str) -> None:
        self.context(role).unsave_video(video_id)

    def is_video_saved(self, role: str, video_id: str) -> bool:
        return self.context(role).is_video_saved(video_id)

    def toggle_saved_video(self, role: str, video: SavedVideo) -> bool:
        return self.context(role).toggle_saved_video(video)

    def complete_video(self, role: str, video_id: str) -> None:
        self.context(role).complete_video(video_id)

    def is_video_completed(self, role: str, video_id: str) -> bool:
        return self.context(role).is_video_completed(video_id)

    def apply_to_job(self, role: str, job_id: str) -> None:
        self.context(role).apply_to_job(job_id)

    def withdraw_job_application(self, role: str, job_id: str) -> None:
        self.context(role).withdraw_job_application(job_id)

    def is_job_applied(self, role: str, job_id: str) -> bool:
        return self.context(role).is_job_applied(job_id)

    def drop_job(self, role: str, job_id: str) -> None:
        self.context(role).drop_job(job_id)

    def get_completed_videos_with_details(self, role: str) -> List[TrainingVideo]:
        return self.context(role).get_completed_videos_with_details()
