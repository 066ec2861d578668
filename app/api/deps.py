# Dependency injection for the API

from typing import Optional
from fastapi import Depends, HTTPException, status, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.async_session import get_async_db
from app.models.profile import Profile
from app.schemas.token import TokenPayload
from app.core.config import settings
from app.crud.profile import profile as crud_profile
from app.utils.logger import get_logger
import uuid
from datetime import datetime, timezone

logger = get_logger("auth")

# Tokens are issued out of band (create_admin.py), so there is no login route to point at
bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_profile(
        db: AsyncSession = Depends(get_async_db),
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Profile:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": False},
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise _credentials_exception()

    if token_data.exp and datetime.fromtimestamp(token_data.exp, tz=timezone.utc) < datetime.now(timezone.utc):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not token_data.sub:
        raise _credentials_exception()

    try:
        profile_id = uuid.UUID(token_data.sub)
    except ValueError:
        logger.warning("Token presented with a malformed subject")
        raise _credentials_exception()

    profile = await crud_profile.get_by_id(db, profile_id=profile_id)
    if not profile:
        logger.warning(f"Token presented for unknown profile {profile_id}")
        raise _credentials_exception()
    return profile

def verify_api_key(x_api_key: Optional[str] = Header(None)):
    """Verify API key for internal services"""
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required",
            headers={"X-API-Key": "required"},
        )

    if not settings.INTERNAL_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal API key not configured"
        )

    if x_api_key != settings.INTERNAL_API_KEY:
        logger.warning("Rejected request with invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"X-API-Key": "invalid"},
        )

    return True

async def get_current_admin_profile(
    current_profile: Profile = Depends(get_current_profile),
) -> Profile:
    if not current_profile.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough privileges"
        )
    return current_profile
