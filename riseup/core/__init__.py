from .models import SavedJob, SavedVideo, SavedItem, TrainingVideo, parse_saved_item
from .catalog import TRAINING_CATALOG, find_video
from .keys import ROLES, DATA_KINDS, storage_key, resolve_role_context
from .saved_state import SavedState, SavedStateManager, clear_role_data

__all__ = [
    "SavedJob",
    "SavedVideo",
    "SavedItem",
    "TrainingVideo",
    "parse_saved_item",
    "TRAINING_CATALOG",
    "find_video",
    "ROLES",
    "DATA_KINDS",
    "storage_key",
    "resolve_role_context",
    "SavedState",
    "SavedStateManager",
    "clear_role_data",
]
