"""
Role definitions — which modules and capabilities make up each role.

Roles are predefined and immutable. Owner holds everything; admin runs the
business modules but not system administration; the three managers each own
one module; cashier works the POS; viewer reads.

    role               modules
    owner              commerce, finance, mealflow, system
    admin              commerce, finance, mealflow
    commerce_manager   commerce
    fintrack_manager   finance
    mealflow_manager   mealflow
    cashier            commerce
    viewer             commerce, finance, mealflow

The registry is checked once at import; a table that breaks its own
invariants fails the import rather than a request.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from dailyos.auth.permissions import (
    ALL_CAPABILITIES,
    EDIT_CAPABILITIES,
    MODULE_CAPABILITIES,
    Capability,
    ModuleId,
)


class RoleId(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    COMMERCE_MANAGER = "commerce_manager"
    FINTRACK_MANAGER = "fintrack_manager"
    MEALFLOW_MANAGER = "mealflow_manager"
    CASHIER = "cashier"
    VIEWER = "viewer"


@dataclass(frozen=True)
class Role:
    id: RoleId
    name: str
    description: str
    modules: frozenset[ModuleId]
    capabilities: frozenset[Capability]
    is_system: bool = True      # predefined, cannot be edited or deleted


# ── Commerce: everything in the module ──
_COMMERCE_ALL = frozenset(MODULE_CAPABILITIES[ModuleId.COMMERCE])

# ── Commerce manager: catalog and storefront, no stock adjustments, refunds or POS ──
_COMMERCE_MANAGER_CAPS = frozenset({
    Capability.VIEW_PRODUCTS,
    Capability.EDIT_PRODUCTS,
    Capability.PUBLISH_STOREFRONT,
    Capability.VIEW_INVENTORY,
    Capability.VIEW_ORDERS,
    Capability.EDIT_ORDERS,
    Capability.VIEW_CUSTOMERS,
    Capability.EDIT_CUSTOMERS,
    Capability.VIEW_REPORTS,
})

# ── Cashier: ring up sales, look things up ──
_CASHIER_CAPS = frozenset({
    Capability.VIEW_PRODUCTS,
    Capability.VIEW_INVENTORY,
    Capability.VIEW_ORDERS,
    Capability.CREATE_POS_SALE,
    Capability.VIEW_CUSTOMERS,
})

# ── Viewer: read-only across the business modules ──
_VIEWER_CAPS = frozenset({
    Capability.VIEW_PRODUCTS,
    Capability.VIEW_INVENTORY,
    Capability.VIEW_ORDERS,
    Capability.VIEW_CUSTOMERS,
    Capability.VIEW_REPORTS,
    Capability.VIEW_FINANCES,
    Capability.VIEW_MEALS,
    Capability.VIEW_RECIPES,
})

# ── Admin: all of commerce and mealflow, finance read-only ──
_ADMIN_CAPS = frozenset({
    *_COMMERCE_ALL,
    Capability.VIEW_FINANCES,
    *MODULE_CAPABILITIES[ModuleId.MEALFLOW],
})


_BUSINESS_MODULES = frozenset({ModuleId.COMMERCE, ModuleId.FINANCE, ModuleId.MEALFLOW})

_ROLES: tuple[Role, ...] = (
    Role(
        id=RoleId.OWNER,
        name="Owner",
        description="Full access to all modules and capabilities",
        modules=frozenset(ModuleId),
        capabilities=frozenset(ALL_CAPABILITIES),
    ),
    Role(
        id=RoleId.ADMIN,
        name="Admin",
        description="All modules except system administration",
        modules=_BUSINESS_MODULES,
        capabilities=_ADMIN_CAPS,
    ),
    Role(
        id=RoleId.COMMERCE_MANAGER,
        name="Commerce Manager",
        description="Manage products, inventory, and storefront",
        modules=frozenset({ModuleId.COMMERCE}),
        capabilities=_COMMERCE_MANAGER_CAPS,
    ),
    Role(
        id=RoleId.FINTRACK_MANAGER,
        name="FinTrack Manager",
        description="View and export financial data",
        modules=frozenset({ModuleId.FINANCE}),
        capabilities=frozenset(MODULE_CAPABILITIES[ModuleId.FINANCE]),
    ),
    Role(
        id=RoleId.MEALFLOW_MANAGER,
        name="MealFlow Manager",
        description="Manage meals, recipes, and groceries",
        modules=frozenset({ModuleId.MEALFLOW}),
        capabilities=frozenset(MODULE_CAPABILITIES[ModuleId.MEALFLOW]),
    ),
    Role(
        id=RoleId.CASHIER,
        name="Cashier",
        description="POS sales and order viewing only",
        modules=frozenset({ModuleId.COMMERCE}),
        capabilities=_CASHIER_CAPS,
    ),
    Role(
        id=RoleId.VIEWER,
        name="Viewer",
        description="Read-only access to all modules",
        modules=_BUSINESS_MODULES,
        capabilities=_VIEWER_CAPS,
    ),
)


def _build_registry(roles: tuple[Role, ...]) -> Mapping[RoleId, Role]:
    """Index the role table by id and check it against the enumerations."""
    registry: dict[RoleId, Role] = {}
    for role in roles:
        if not isinstance(role.id, RoleId):
            raise RuntimeError(f"Role {role.id!r} is not a RoleId")
        if role.id in registry:
            raise RuntimeError(f"Role {role.id.value} is defined twice")
        bad_modules = [m for m in role.modules if not isinstance(m, ModuleId)]
        bad_caps = [c for c in role.capabilities if not isinstance(c, Capability)]
        if bad_modules or bad_caps:
            raise RuntimeError(
                f"Role {role.id.value} references unknown values: {bad_modules + bad_caps}"
            )
        registry[role.id] = role

    missing = set(RoleId) - set(registry)
    if missing:
        raise RuntimeError(f"Roles missing from registry: {sorted(r.value for r in missing)}")

    if sorted(ALL_CAPABILITIES) != sorted(Capability):
        raise RuntimeError("Every capability must belong to exactly one module")
    for module, caps in EDIT_CAPABILITIES.items():
        if not caps.issubset(MODULE_CAPABILITIES[module]):
            raise RuntimeError(f"Edit capabilities of {module.value} must live in that module")

    return MappingProxyType(registry)


PREDEFINED_ROLES: Mapping[RoleId, Role] = _build_registry(_ROLES)


def get_role(role_id: RoleId) -> Role:
    return PREDEFINED_ROLES[role_id]


def get_all_roles() -> list[Role]:
    """All predefined roles, owner first, viewer last."""
    return list(PREDEFINED_ROLES.values())
