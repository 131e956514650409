from __future__ import annotations

from typing import Optional

from riseup.core.saved_state import SavedStateManager
from riseup.db.models import Base
from riseup.db.session import ENGINE
from riseup.db.store import KeyValueStore

_MANAGER: Optional[SavedStateManager] = None


def state_manager() -> SavedStateManager:
    """FastAPI dependency that yields the process-wide :class:`SavedStateManager`.

    Usage in route handlers:
        def handler(manager: SavedStateManager = Depends(state_manager)):
            ...
    """
    global _MANAGER
    if _MANAGER is None:
        Base.metadata.create_all(bind=ENGINE)
        _MANAGER = SavedStateManager(KeyValueStore())
    return _MANAGER


__all__ = ["state_manager"]
