"""FastAPI dependency injection factories.

One SnapshotController per process, built from settings on first use.
Role checks are enforced here, at the caller side of the core.
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from bedrock.access.gate import can_mutate, can_view
from bedrock.config.settings import Settings, SnapshotBackend, get_settings
from bedrock.store.controller import SnapshotController
from bedrock.store.persistence import (
    FileSnapshotStore,
    InMemorySnapshotStore,
    SnapshotStore,
    SqlSnapshotStore,
)


def build_store(settings: Settings) -> SnapshotStore:
    """Instantiate the configured snapshot store."""
    if settings.SNAPSHOT_BACKEND == SnapshotBackend.MEMORY:
        return InMemorySnapshotStore()
    if settings.SNAPSHOT_BACKEND == SnapshotBackend.SQL:
        return SqlSnapshotStore(settings.DATABASE_URL, key=settings.SNAPSHOT_KEY)
    return FileSnapshotStore(settings.SNAPSHOT_PATH)


@lru_cache(maxsize=1)
def get_controller() -> SnapshotController:
    return SnapshotController(build_store(get_settings()))


# ---------------------------------------------------------------------------
# Operator role
# ---------------------------------------------------------------------------


def get_operator_role(
    x_operator_role: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    return x_operator_role or settings.DEFAULT_OPERATOR_ROLE


def require_mutate(role: str = Depends(get_operator_role)) -> str:
    if not can_mutate(role):
        raise HTTPException(status_code=403, detail=f"Role {role!r} may not modify records.")
    return role


def require_view(section: str):
    """Dependency factory: the operator must be able to see ``section``."""

    def _check(role: str = Depends(get_operator_role)) -> str:
        if not can_view(role, section):
            raise HTTPException(
                status_code=403, detail=f"Role {role!r} may not view {section}.",
            )
        return role

    return _check
