"""
Permission engine: pure access decisions over the predefined role registry.

Two stages:
  1. The role grants modules and capabilities (PREDEFINED_ROLES).
  2. The account mode masks capabilities. It never hides a module: an
     internal-mode account still sees Commerce in navigation, it just can't
     ring up POS sales or publish the storefront.

Every function accepts enum members or their string values and is total:
an unknown role, module, capability or path is a "no", never an exception.
Nothing here keeps state, so any number of requests may call these
concurrently.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Mapping, TypeVar

from dailyos.auth.permissions import (
    BLOCKED_IN_INTERNAL,
    EDIT_CAPABILITIES,
    AccountMode,
    Capability,
    ModuleId,
)
from dailyos.auth.roles import PREDEFINED_ROLES, Role, RoleId
from dailyos.schemas.schemas import AccessSummary

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# Top-level route segment → module. Paths outside this table are not module-gated.
ROUTE_MODULE_MAP: Mapping[str, ModuleId] = {
    "/commerce": ModuleId.COMMERCE,
    "/finance": ModuleId.FINANCE,
    "/mealflow": ModuleId.MEALFLOW,
    "/system": ModuleId.SYSTEM,
}


def _check_route_table(table: Mapping[str, ModuleId]) -> None:
    """Prefixes must be single, distinct segments so lookup order never matters."""
    for prefix in table:
        if not prefix.startswith("/") or prefix.count("/") != 1 or len(prefix) < 2:
            raise RuntimeError(f"Route prefix {prefix!r} must be a single top-level segment")


_check_route_table(ROUTE_MODULE_MAP)


# ── Coercion ─────────────────────────────────────────────────────────────────

def _coerce(enum_cls: type[E], value) -> E | None:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def _lookup_role(role: RoleId | str | None) -> Role | None:
    role_id = _coerce(RoleId, role)
    if role_id is None:
        if role is not None:
            logger.debug("Unknown role id %r treated as zero-privilege", role)
        return None
    return PREDEFINED_ROLES[role_id]


def _is_internal(mode: AccountMode | str | None) -> bool:
    return _coerce(AccountMode, mode) is AccountMode.INTERNAL


# ── Effective role ───────────────────────────────────────────────────────────

def resolve_effective_role(
    assigned: RoleId | str | None,
    override: RoleId | str | None = None,
) -> RoleId | str:
    """
    Pick the role a decision runs as: dev override, then the assigned role,
    then viewer when nobody is signed in. Only None counts as absent; an
    empty string is an unknown id like any other.

    Unknown ids are passed through untouched so they keep denying; they are
    never upgraded to viewer.
    """
    for candidate in (override, assigned):
        if candidate is not None:
            return _coerce(RoleId, candidate) or candidate
    return RoleId.VIEWER


# ── Modules ──────────────────────────────────────────────────────────────────

def get_accessible_modules(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
) -> frozenset[ModuleId]:
    """Modules the role may open. The account mode does not narrow this set."""
    definition = _lookup_role(role)
    if definition is None:
        return frozenset()
    return definition.modules


def can_access_module(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
    module: ModuleId | str,
) -> bool:
    module_id = _coerce(ModuleId, module)
    return module_id is not None and module_id in get_accessible_modules(role, mode)


def can_edit_module(role: RoleId | str | None, module: ModuleId | str) -> bool:
    """True if the role holds any edit capability of the module (mode ignored)."""
    module_id = _coerce(ModuleId, module)
    if module_id is None:
        return False
    return any(has_capability(role, cap) for cap in EDIT_CAPABILITIES[module_id])


# ── Capabilities ─────────────────────────────────────────────────────────────

def get_role_capabilities(role: RoleId | str | None) -> frozenset[Capability]:
    definition = _lookup_role(role)
    if definition is None:
        return frozenset()
    return definition.capabilities


def has_capability(role: RoleId | str | None, capability: Capability | str) -> bool:
    """Raw grant from the registry; the account mode is not consulted."""
    cap = _coerce(Capability, capability)
    return cap is not None and cap in get_role_capabilities(role)


def is_capability_available(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
    capability: Capability | str,
) -> bool:
    """The role grants the capability and the account mode doesn't mask it."""
    if not has_capability(role, capability):
        return False
    if _is_internal(mode) and _coerce(Capability, capability) in BLOCKED_IN_INTERNAL:
        return False
    return True


def get_available_capabilities(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
) -> frozenset[Capability]:
    capabilities = get_role_capabilities(role)
    if _is_internal(mode):
        return capabilities - BLOCKED_IN_INTERNAL
    return capabilities


def check_capabilities(
    role: RoleId | str | None,
    capabilities: Iterable[Capability | str],
) -> dict[Capability, bool]:
    """Batch `has_capability`. Values that aren't capabilities are left out."""
    result: dict[Capability, bool] = {}
    for value in capabilities:
        cap = _coerce(Capability, value)
        if cap is not None:
            result[cap] = has_capability(role, cap)
    return result


def can_use_pos(role: RoleId | str | None, mode: AccountMode | str | None) -> bool:
    return is_capability_available(role, mode, Capability.CREATE_POS_SALE)


def can_use_storefront(role: RoleId | str | None, mode: AccountMode | str | None) -> bool:
    return is_capability_available(role, mode, Capability.PUBLISH_STOREFRONT)


# ── Routes ───────────────────────────────────────────────────────────────────

def get_module_for_route(path: str) -> ModuleId | None:
    """
    Map an app path to the module that gates it.

    A prefix matches only whole segments: "/commerce" and "/commerce/pos"
    belong to commerce, "/commerce-extra" does not. Query strings and
    fragments are ignored.
    """
    if not isinstance(path, str):
        return None
    path = path.split("?", 1)[0].split("#", 1)[0]
    for prefix, module in ROUTE_MODULE_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return module
    return None


def can_access_route(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
    path: str,
) -> bool:
    module = get_module_for_route(path)
    # Home, settings and the like are open to every signed-in role
    if module is None:
        return True
    return can_access_module(role, mode, module)


# ── Member administration ────────────────────────────────────────────────────

def can_manage_user_role(
    acting_role: RoleId | str | None,
    target_role: RoleId | str | None,
    new_role: RoleId | str | None,
) -> bool:
    """
    Only an owner may touch an owner, whether promoting someone to owner or
    changing an existing owner. Everything else needs owner or admin.
    """
    acting = _coerce(RoleId, acting_role)
    if _coerce(RoleId, target_role) is RoleId.OWNER or _coerce(RoleId, new_role) is RoleId.OWNER:
        return acting is RoleId.OWNER
    return acting in (RoleId.OWNER, RoleId.ADMIN)


def can_remove_user(acting_role: RoleId | str | None) -> bool:
    return _coerce(RoleId, acting_role) is RoleId.OWNER


def can_invite_users(role: RoleId | str | None) -> bool:
    return has_capability(role, Capability.INVITE_USERS)


def get_assignable_roles(acting_role: RoleId | str | None) -> list[Role]:
    """Roles offered when assigning a member: owners see all, others all but owner."""
    acting = _coerce(RoleId, acting_role)
    if acting is None:
        return []
    roles = list(PREDEFINED_ROLES.values())
    if acting is RoleId.OWNER:
        return roles
    return [r for r in roles if r.id is not RoleId.OWNER]


# ── Display helpers ──────────────────────────────────────────────────────────

def get_role_name(role: RoleId | str | None) -> str:
    definition = _lookup_role(role)
    if definition is not None:
        return definition.name
    return "" if role is None else str(role)


def get_role_description(role: RoleId | str | None) -> str:
    definition = _lookup_role(role)
    return definition.description if definition is not None else ""


def describe_access(
    role: RoleId | str | None,
    mode: AccountMode | str | None,
) -> AccessSummary:
    """Everything a client needs to render navigation and action buttons."""
    role_value = role.value if isinstance(role, Enum) else ("" if role is None else str(role))
    mode_value = mode.value if isinstance(mode, Enum) else ("" if mode is None else str(mode))
    return AccessSummary(
        role=role_value,
        role_name=get_role_name(role),
        account_mode=mode_value,
        modules=sorted(m.value for m in get_accessible_modules(role, mode)),
        capabilities=sorted(c.value for c in get_available_capabilities(role, mode)),
        can_use_pos=can_use_pos(role, mode),
        can_use_storefront=can_use_storefront(role, mode),
        can_invite_users=can_invite_users(role),
    )
