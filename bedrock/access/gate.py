"""Access Gate — role checks consumed by the presentation layer.

Two models coexist:

- Granular section tokens on each Role: a token equal to a section id grants
  edit capability, ``<section>_view`` grants read-only capability. Used by
  ``can_view`` and ``can_edit``.
- The mutation gate, ``can_mutate``, which only asks whether the operator
  holds one of the two elevated roles. It does not consult section tokens.

The mutation functions never call these checks themselves; enforcing them
is the caller's job.
"""

from collections.abc import Iterable

from bedrock.models.entities import Role
from bedrock.store.seed import ROLES

ELEVATED_ROLES = frozenset({"admin", "program_manager"})


def find_role(role_id: str | None, roles: Iterable[Role] = ROLES) -> Role | None:
    """Look up a role by id in the catalog, or ``None``."""
    for role in roles:
        if role.id == role_id:
            return role
    return None


def can_mutate(role_id: str | None) -> bool:
    """Whether the operator may create, update or delete records."""
    return role_id in ELEVATED_ROLES


def can_view(role_id: str | None, section: str, roles: Iterable[Role] = ROLES) -> bool:
    """Whether the role may see ``section`` (edit or view-only token)."""
    role = find_role(role_id, roles)
    if role is None:
        return False
    return section in role.permissions or f"{section}_view" in role.permissions


def can_edit(role_id: str | None, section: str, roles: Iterable[Role] = ROLES) -> bool:
    """Whether the role holds the edit token for ``section``."""
    role = find_role(role_id, roles)
    return role is not None and section in role.permissions
