from dailyos.auth.permissions import AccountMode, Capability, ModuleId, BLOCKED_IN_INTERNAL, MODULE_CAPABILITIES
from dailyos.auth.roles import Role, RoleId, PREDEFINED_ROLES, get_role, get_all_roles
from dailyos.auth.engine import (
    can_access_module, can_access_route, can_edit_module, can_invite_users,
    can_manage_user_role, can_remove_user, can_use_pos, can_use_storefront,
    check_capabilities, describe_access, get_accessible_modules, get_assignable_roles,
    get_available_capabilities, get_module_for_route, get_role_capabilities,
    get_role_description, get_role_name, has_capability, is_capability_available,
    resolve_effective_role,
)
from dailyos.auth.context import AccessContext

__all__ = [
    "AccountMode", "Capability", "ModuleId", "BLOCKED_IN_INTERNAL", "MODULE_CAPABILITIES",
    "Role", "RoleId", "PREDEFINED_ROLES", "get_role", "get_all_roles",
    "can_access_module", "can_access_route", "can_edit_module", "can_invite_users",
    "can_manage_user_role", "can_remove_user", "can_use_pos", "can_use_storefront",
    "check_capabilities", "describe_access", "get_accessible_modules", "get_assignable_roles",
    "get_available_capabilities", "get_module_for_route", "get_role_capabilities",
    "get_role_description", "get_role_name", "has_capability", "is_capability_available",
    "resolve_effective_role", "AccessContext",
]
