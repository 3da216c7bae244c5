"""
AccessContext: who is asking, in which space, as which role, in which mode.

Every guarded request gets one. It carries:
- user_id: the signed-in member
- space_id: the tenant space the token was issued for
- assigned_role: the member's role in that space
- account_mode: the space's commerce/internal setting
- override_role: dev-only role switch (None unless the deployment allows it)

All decisions delegate to the permission engine with the effective role.
The require_* helpers turn a "no" into a 403 for route handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException

from dailyos.auth import engine
from dailyos.auth.permissions import AccountMode, Capability, ModuleId
from dailyos.auth.roles import RoleId
from dailyos.schemas.schemas import AccessSummary, RoleOut

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessContext:
    user_id: str = "anonymous"
    space_id: str | None = None
    assigned_role: RoleId | str | None = None
    account_mode: AccountMode | str = AccountMode.COMMERCE
    override_role: RoleId | str | None = None

    @property
    def role(self) -> RoleId | str:
        return engine.resolve_effective_role(self.assigned_role, self.override_role)

    @property
    def actor(self) -> str:
        """Identity string for logging."""
        role = self.role
        return f"{role.value if isinstance(role, RoleId) else role}:{self.user_id}"

    # ── Decisions ──

    def can_access_module(self, module: ModuleId | str) -> bool:
        return engine.can_access_module(self.role, self.account_mode, module)

    def has_capability(self, capability: Capability | str) -> bool:
        return engine.has_capability(self.role, capability)

    def can_use_capability(self, capability: Capability | str) -> bool:
        return engine.is_capability_available(self.role, self.account_mode, capability)

    def can_access_route(self, path: str) -> bool:
        return engine.can_access_route(self.role, self.account_mode, path)

    def summary(self) -> AccessSummary:
        return engine.describe_access(self.role, self.account_mode)

    def assignable_roles(self) -> list[RoleOut]:
        return [RoleOut.from_role(r) for r in engine.get_assignable_roles(self.role)]

    # ── Enforcement ──

    def _deny(self, detail: str, path: str | None = None) -> None:
        extra = {"user": self.user_id, "role": _label(self.role), "space_id": self.space_id}
        if path is not None:
            extra["path"] = path
        logger.debug("Access denied for %s: %s", self.actor, detail, extra=extra)
        raise HTTPException(status_code=403, detail=f"Insufficient permissions: {detail}")

    def require_module(self, module: ModuleId | str) -> None:
        """Raise 403 if the caller can't open the module."""
        if not self.can_access_module(module):
            self._deny(f"requires module {_label(module)}")

    def require_capability(self, capability: Capability | str) -> None:
        """Raise 403 if the capability isn't granted or is masked by the account mode."""
        if not self.can_use_capability(capability):
            self._deny(f"requires {_label(capability)}")

    def require_any_capability(self, *capabilities: Capability | str) -> None:
        """Raise 403 if NONE of the capabilities are available."""
        if not any(self.can_use_capability(c) for c in capabilities):
            needed = ", ".join(_label(c) for c in capabilities)
            self._deny(f"requires one of [{needed}]")

    def require_route(self, path: str) -> None:
        if not self.can_access_route(path):
            self._deny(f"cannot access {path}", path=path)

    def require_role_change(self, target_role: RoleId | str, new_role: RoleId | str) -> None:
        if not engine.can_manage_user_role(self.role, target_role, new_role):
            self._deny(f"cannot change {_label(target_role)} to {_label(new_role)}")

    def require_remove_user(self) -> None:
        if not engine.can_remove_user(self.role):
            self._deny("only owners can remove members")


def _label(value) -> str:
    return value.value if isinstance(value, (RoleId, ModuleId, Capability)) else str(value)
