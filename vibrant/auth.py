from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt, ExpiredSignatureError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Any, Optional
from vibrant.config import settings
import logging

# Initialize logging
logger = logging.getLogger(__name__)

# Bearer scheme carrying the identity provider's session token
bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"
ORG_ADMIN_ROLE = "org:admin"


def _is_admin_role(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return value == ORG_ADMIN_ROLE or value.endswith(f":{ADMIN_ROLE}")


# Admin check over the session claims issued by the identity provider
def is_admin_from_session_claims(claims: Optional[dict]) -> bool:
    """
    True when the session belongs to a site admin.

    Accepted shapes:
    - ``metadata.role == "admin"`` (user public metadata)
    - ``org_role == "admin"``
    - ``organizations`` as a list of roles or a mapping of org id → role,
      where a role of ``org:admin`` or anything ending in ``:admin`` counts
    """
    if not claims:
        return False

    metadata = claims.get("metadata") or {}
    if isinstance(metadata, dict) and metadata.get("role") == ADMIN_ROLE:
        return True

    if claims.get("org_role") == ADMIN_ROLE:
        return True

    organizations = claims.get("organizations")
    if isinstance(organizations, dict):
        return any(_is_admin_role(role) for role in organizations.values())
    if isinstance(organizations, list):
        return any(_is_admin_role(role) for role in organizations)
    return False


# Function to create a session token (local development and tests)
def create_session_token(claims: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = claims.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=30))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


# Function to decode a session token into its claims
def decode_session_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        logger.warning("Session token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError as e:
        logger.warning(f"Session token decoding failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_session_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_session_token(credentials.credentials)


async def require_admin(claims: dict = Depends(get_session_claims)) -> dict:
    if not is_admin_from_session_claims(claims):
        logger.warning(f"Admin access denied for subject {claims.get('sub')!r}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return claims
