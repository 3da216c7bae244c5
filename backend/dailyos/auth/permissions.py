"""
Permission constants — the modules, capabilities and account modes of DailyOS.

A module is a top-level feature area (what shows up in navigation). A
capability is one action inside a module. Roles grant both; the account
mode then masks a few capabilities for accounts that don't sell.

    module        ──►  capabilities
    commerce           products, inventory, orders, POS, storefront, ...
    finance            transactions, budgets, goals, costs
    mealflow           meals, recipes, groceries
    system             users, roles, audit log, account settings
"""

from enum import Enum


class ModuleId(str, Enum):
    COMMERCE = "commerce"
    FINANCE = "finance"
    MEALFLOW = "mealflow"
    SYSTEM = "system"


class AccountMode(str, Enum):
    COMMERCE = "commerce"       # full feature set
    INTERNAL = "internal"       # back-office only: no POS, no storefront


class Capability(str, Enum):
    # ── Commerce ──
    VIEW_PRODUCTS = "view_products"
    EDIT_PRODUCTS = "edit_products"
    PUBLISH_STOREFRONT = "publish_storefront"
    VIEW_INVENTORY = "view_inventory"
    ADJUST_INVENTORY = "adjust_inventory"
    VIEW_ORDERS = "view_orders"
    EDIT_ORDERS = "edit_orders"
    REFUND_ORDER = "refund_order"
    CREATE_POS_SALE = "create_pos_sale"
    VIEW_CUSTOMERS = "view_customers"
    EDIT_CUSTOMERS = "edit_customers"
    VIEW_REPORTS = "view_reports"

    # ── Finance ──
    VIEW_FINANCES = "view_finances"
    EDIT_FINANCES = "edit_finances"
    EXPORT_FINANCES = "export_finances"
    MANAGE_BUDGET = "manage_budget"
    MANAGE_GOALS = "manage_goals"
    MANAGE_COSTS = "manage_costs"

    # ── MealFlow ──
    VIEW_MEALS = "view_meals"
    EDIT_MEALS = "edit_meals"
    MANAGE_GROCERIES = "manage_groceries"
    VIEW_RECIPES = "view_recipes"
    EDIT_RECIPES = "edit_recipes"

    # ── System ──
    VIEW_USERS = "view_users"
    MANAGE_USERS = "manage_users"
    INVITE_USERS = "invite_users"
    MANAGE_ROLES = "manage_roles"
    VIEW_AUDIT_LOG = "view_audit_log"
    MANAGE_ACCOUNT_SETTINGS = "manage_account_settings"


# Which capabilities live in which module
MODULE_CAPABILITIES: dict[ModuleId, tuple[Capability, ...]] = {
    ModuleId.COMMERCE: (
        Capability.VIEW_PRODUCTS,
        Capability.EDIT_PRODUCTS,
        Capability.PUBLISH_STOREFRONT,
        Capability.VIEW_INVENTORY,
        Capability.ADJUST_INVENTORY,
        Capability.VIEW_ORDERS,
        Capability.EDIT_ORDERS,
        Capability.REFUND_ORDER,
        Capability.CREATE_POS_SALE,
        Capability.VIEW_CUSTOMERS,
        Capability.EDIT_CUSTOMERS,
        Capability.VIEW_REPORTS,
    ),
    ModuleId.FINANCE: (
        Capability.VIEW_FINANCES,
        Capability.EDIT_FINANCES,
        Capability.EXPORT_FINANCES,
        Capability.MANAGE_BUDGET,
        Capability.MANAGE_GOALS,
        Capability.MANAGE_COSTS,
    ),
    ModuleId.MEALFLOW: (
        Capability.VIEW_MEALS,
        Capability.EDIT_MEALS,
        Capability.MANAGE_GROCERIES,
        Capability.VIEW_RECIPES,
        Capability.EDIT_RECIPES,
    ),
    ModuleId.SYSTEM: (
        Capability.VIEW_USERS,
        Capability.MANAGE_USERS,
        Capability.INVITE_USERS,
        Capability.MANAGE_ROLES,
        Capability.VIEW_AUDIT_LOG,
        Capability.MANAGE_ACCOUNT_SETTINGS,
    ),
}


# Capabilities that "edit" something in a module; holding any one of them
# means the module should render in edit mode.
EDIT_CAPABILITIES: dict[ModuleId, frozenset[Capability]] = {
    ModuleId.COMMERCE: frozenset({
        Capability.EDIT_PRODUCTS,
        Capability.EDIT_ORDERS,
        Capability.EDIT_CUSTOMERS,
        Capability.ADJUST_INVENTORY,
    }),
    ModuleId.FINANCE: frozenset({
        Capability.EDIT_FINANCES,
        Capability.MANAGE_BUDGET,
        Capability.MANAGE_GOALS,
    }),
    ModuleId.MEALFLOW: frozenset({
        Capability.EDIT_MEALS,
        Capability.EDIT_RECIPES,
        Capability.MANAGE_GROCERIES,
    }),
    ModuleId.SYSTEM: frozenset({
        Capability.MANAGE_USERS,
        Capability.MANAGE_ACCOUNT_SETTINGS,
    }),
}


# Suppressed for every role while the account runs in internal mode
BLOCKED_IN_INTERNAL: frozenset[Capability] = frozenset({
    Capability.CREATE_POS_SALE,
    Capability.PUBLISH_STOREFRONT,
})


ALL_CAPABILITIES: tuple[Capability, ...] = tuple(
    cap for caps in MODULE_CAPABILITIES.values() for cap in caps
)
