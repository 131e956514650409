from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


def now_iso() -> str:
    """UTC timestamp in the same shape the mobile client writes (``...T12:00:00.000Z``)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _retag(data: Any) -> Any:
    # Older clients tagged records with "type" instead of "kind"
    if isinstance(data, dict) and "kind" not in data and "type" in data:
        data = {k: v for k, v in data.items() if k != "type"} | {"kind": data["type"]}
    return data


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _legacy_type_tag(cls, data: Any) -> Any:
        return _retag(data)


class TrainingVideo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    category: str
    duration: str
    description: str
    skills_gained: tuple[str, ...] = Field(default=(), alias="skillsGained")


class SavedJob(_Record):
    id: str
    title: str
    company: str = ""
    location: str = ""
    salary: str = ""
    skills: list[str] = []
    saved_date: str = Field(default_factory=now_iso, alias="savedDate")
    kind: Literal["job"] = "job"


class SavedVideo(_Record):
    id: str
    title: str
    category: str = ""
    duration: str = ""
    description: str = ""
    skills_gained: list[str] = Field(default_factory=list, alias="skillsGained")
    saved_date: str = Field(default_factory=now_iso, alias="savedDate")
    kind: Literal["video"] = "video"


SavedItem = Annotated[Union[SavedJob, SavedVideo], Field(discriminator="kind")]

_SAVED_ITEM = TypeAdapter(SavedItem)


def parse_saved_item(data: Any) -> SavedJob | SavedVideo:
    """Validate a raw dict into the matching SavedJob/SavedVideo variant."""
    return _SAVED_ITEM.validate_python(_retag(data))


def saved_job_from_listing(listing: dict) -> SavedJob:
    """Build a SavedJob from a job payload as returned by the jobs API.

    Accepts both the backend's document shape (``_id``, ``minimumSalary``,
    ``requiredSkills``) and the flattened client shape (``id``, ``salary``,
    ``skills``).
    """
    return SavedJob(
        id=listing.get("_id") or listing.get("id"),
        title=listing.get("title") or "",
        company=listing.get("company") or "",
        location=listing.get("location") or "",
        salary=listing.get("minimumSalary") or listing.get("salary") or "",
        skills=list(listing.get("requiredSkills") or listing.get("skills") or []),
        saved_date=now_iso(),
    )


def saved_video_from_catalog(video: TrainingVideo) -> SavedVideo:
    return SavedVideo(
        id=video.id,
        title=video.title,
        category=video.category,
        duration=video.duration,
        description=video.description,
        skills_gained=list(video.skills_gained),
        saved_date=now_iso(),
    )


__all__ = [
    "TrainingVideo",
    "SavedJob",
    "SavedVideo",
    "SavedItem",
    "parse_saved_item",
    "saved_job_from_listing",
    "saved_video_from_catalog",
    "now_iso",
]
