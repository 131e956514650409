from __future__ import annotations

from typing import Dict, Literal, Optional

Role = Literal["user", "employer"]
DataKind = Literal["savedJobs", "savedVideos", "completedVideos", "appliedJobs"]

ROLES: tuple[str, ...] = ("user", "employer")
DATA_KINDS: tuple[DataKind, ...] = ("savedJobs", "savedVideos", "completedVideos", "appliedJobs")


def validate_role(role: str) -> str:
    if role not in ROLES:
        raise ValueError(f"role must be one of: {' | '.join(ROLES)} (got {role!r})")
    return role


def storage_key(role: str, kind: DataKind) -> str:
    """Persistence key for one collection of one role-context, e.g. ``savedJobs_user``."""
    validate_role(role)
    if kind not in DATA_KINDS:
        raise ValueError(f"unknown data kind: {kind!r}")
    return f"{kind}_{role}"


def storage_keys(role: str) -> Dict[DataKind, str]:
    return {kind: storage_key(role, kind) for kind in DATA_KINDS}


def resolve_role_context(user_type: Optional[str], view_mode: str = "user") -> str:
    """Effective role-context for an authenticated account.

    Admins act in whichever view they switched to; employers always act as
    ``employer``; anything else (job seekers, anonymous) acts as ``user``.
    """
    if user_type == "admin":
        return validate_role(view_mode)
    return "employer" if user_type == "employer" else "user"
