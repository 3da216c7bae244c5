"""
API Dependencies — access context resolution and permission guards.

`get_access_context`:
  1. Extracts the Bearer token from the Authorization header
  2. Decodes and validates the JWT
  3. Reads the member's space, role and the space's account mode from its claims
  4. Applies the X-Dev-Role override only when the deployment allows it

The role always comes from the signed token. A client-sent override is
ignored unless `settings.allow_role_override` is on, which production refuses.
"""

import logging

from fastapi import Depends, Request, HTTPException
from jose import JWTError

from dailyos.auth.context import AccessContext
from dailyos.auth.jwt import decode_access_token
from dailyos.auth.permissions import AccountMode, Capability, ModuleId
from dailyos.auth.roles import RoleId
from dailyos.config import settings

logger = logging.getLogger(__name__)

DEV_ROLE_HEADER = "X-Dev-Role"


# ── Access context (JWT authentication) ───────────────────────────────────────

async def get_access_context(request: Request) -> AccessContext:
    """Build the AccessContext for the current request from its JWT."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")

    token = auth_header[7:]  # strip "Bearer "
    try:
        claims = decode_access_token(token)
    except JWTError as e:
        logger.debug("JWT decode failed: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    role_str = claims.get("role") or ""
    try:
        role = RoleId(role_str)
    except ValueError:
        # Kept as-is so every decision denies
        logger.warning("Token for user %s carries unknown role %r", claims.get("sub"), role_str)
        role = role_str

    try:
        mode = AccountMode(claims.get("mode"))
    except ValueError:
        mode = settings.default_account_mode

    return AccessContext(
        user_id=claims.get("sub", "anonymous"),
        space_id=claims.get("space"),
        assigned_role=role,
        account_mode=mode,
        override_role=_extract_override(request),
    )


def _extract_override(request: Request) -> str | None:
    value = request.headers.get(DEV_ROLE_HEADER)
    if not value:
        return None
    if not settings.allow_role_override:
        logger.debug("Ignoring %s header: role overrides are disabled", DEV_ROLE_HEADER)
        return None
    return value


# ── Permission guards ────────────────────────────────────────────────────────

def require_module(module: ModuleId):
    """
    FastAPI dependency that checks the caller's role can open a module.

    Usage:
        @router.get("/finance/budgets")
        async def list_budgets(ctx: AccessContext = Depends(require_module(ModuleId.FINANCE))):
            ...
    """
    async def _check(ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        ctx.require_module(module)
        return ctx
    return _check


def require_capability(*caps: Capability):
    """
    FastAPI dependency that checks ALL listed capabilities are available,
    i.e. granted by the role and not masked by the account mode.
    """
    async def _check(ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        for cap in caps:
            ctx.require_capability(cap)
        return ctx
    return _check


def require_any_capability(*caps: Capability):
    """
    FastAPI dependency that checks AT LEAST ONE of the listed capabilities is available.
    """
    async def _check(ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        ctx.require_any_capability(*caps)
        return ctx
    return _check


def require_route(strip_prefix: str = "/api"):
    """
    FastAPI dependency that gates a request by its own path.

    API paths mirror the app's page paths under `strip_prefix`, so
    /api/commerce/orders is checked as /commerce/orders.
    """
    async def _check(request: Request, ctx: AccessContext = Depends(get_access_context)) -> AccessContext:
        path = request.url.path
        if strip_prefix and path.startswith(strip_prefix + "/"):
            path = path[len(strip_prefix):]
        ctx.require_route(path)
        return ctx
    return _check
