"""Shared test fixtures for access control tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from dailyos.api.deps import (
    get_access_context,
    require_any_capability,
    require_capability,
    require_module,
    require_route,
)
from dailyos.auth.context import AccessContext
from dailyos.auth.jwt import create_access_token
from dailyos.auth.permissions import AccountMode, Capability, ModuleId
from dailyos.config import settings


def _build_app() -> FastAPI:
    """A throwaway app with one handler per guard style."""
    app = FastAPI()

    @app.get("/api/me/access")
    async def my_access(ctx: AccessContext = Depends(get_access_context)):
        return ctx.summary().model_dump()

    @app.get("/api/finance/budgets")
    async def list_budgets(ctx: AccessContext = Depends(require_module(ModuleId.FINANCE))):
        return {"budgets": []}

    @app.post("/api/commerce/pos")
    async def create_sale(ctx: AccessContext = Depends(require_capability(Capability.CREATE_POS_SALE))):
        return {"created_by": ctx.actor}

    @app.put("/api/commerce/orders/{order_id}")
    async def update_order(order_id: str,
                           ctx: AccessContext = Depends(require_any_capability(
                               Capability.EDIT_ORDERS, Capability.REFUND_ORDER))):
        return {"id": order_id}

    @app.get("/api/commerce/orders")
    async def list_orders(ctx: AccessContext = Depends(require_route())):
        return {"orders": []}

    @app.get("/api/system/members")
    async def list_members(ctx: AccessContext = Depends(require_route())):
        return {"assignable": [r.id for r in ctx.assignable_roles()]}

    @app.get("/api/settings")
    async def get_settings(ctx: AccessContext = Depends(require_route())):
        return {"space": ctx.space_id}

    return app


guarded_app = _build_app()


def make_auth_header(role, mode=AccountMode.COMMERCE, user_id: str = "user-1",
                     space_id: str = "space-1") -> dict:
    """Create an Authorization header with a valid JWT."""
    token = create_access_token(user_id, space_id, role, mode)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the guarded app; tests attach their own auth headers."""
    transport = ASGITransport(app=guarded_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def allow_override(monkeypatch):
    """Turn on the dev role switch for one test."""
    monkeypatch.setattr(settings, "allow_role_override", True)
