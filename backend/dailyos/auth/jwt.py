"""JWT access tokens carrying the member's space, role and account mode."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from dailyos.auth.permissions import AccountMode
from dailyos.auth.roles import RoleId
from dailyos.config import settings

ALGORITHM = "HS256"


def create_access_token(
    user_id: str,
    space_id: str,
    role: RoleId | str,
    account_mode: AccountMode | str,
) -> str:
    """Create a short-lived access token for one space membership."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "space": str(space_id),
        "role": role.value if isinstance(role, RoleId) else role,
        "mode": account_mode.value if isinstance(account_mode, AccountMode) else account_mode,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and validate an access token. Raises JWTError on failure."""
    payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Invalid token type")
    return payload
