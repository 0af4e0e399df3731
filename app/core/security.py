import logging
import secrets
from typing import Optional
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import settings
from app.core.exceptions import CustomHTTPException

logger = logging.getLogger(__name__)

# auto_error is off so a missing header produces our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False, description="Static API token")


def is_valid_api_token(token: Optional[str]) -> bool:
    if not token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), settings.API_TOKEN.encode("utf-8"))


async def verify_api_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> None:
    """Reject the request unless it carries `Authorization: Bearer <API_TOKEN>`"""
    token = credentials.credentials if credentials else None
    if not is_valid_api_token(token):
        logger.error("Unauthorized request: missing or invalid API token")
        raise CustomHTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized request",
            headers={"WWW-Authenticate": "Bearer"},
        )
