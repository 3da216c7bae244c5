"""
Pydantic schemas for serializing roles and resolved access.
"""

from pydantic import BaseModel


# ── Roles ──

class RoleOut(BaseModel):
    id: str
    name: str
    description: str
    modules: list[str]
    capabilities: list[str]
    is_system: bool = True

    @classmethod
    def from_role(cls, role) -> "RoleOut":
        return cls(
            id=role.id.value,
            name=role.name,
            description=role.description,
            modules=sorted(m.value for m in role.modules),
            capabilities=sorted(c.value for c in role.capabilities),
            is_system=role.is_system,
        )


# ── Access ──

class AccessSummary(BaseModel):
    role: str
    role_name: str
    account_mode: str
    modules: list[str]
    capabilities: list[str]     # already masked by the account mode
    can_use_pos: bool
    can_use_storefront: bool
    can_invite_users: bool
