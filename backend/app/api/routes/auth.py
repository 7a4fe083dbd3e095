"""Auth Route — demo login through the injected CredentialLookup.

Invariants:
    - A failed lookup is a 401 AuthenticationError; the response never says which field was wrong
    - The token is an opaque placeholder, not a signed credential
"""

import logging
import secrets

from fastapi import APIRouter, Depends

from app.api.dependencies import get_credentials
from app.core.errors import AuthenticationError
from app.core.repository_protocols import CredentialLookup
from app.schemas.user import LoginRequest, LoginResponse, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest, credentials: CredentialLookup = Depends(get_credentials),
):
    user = await credentials.authenticate(body.email, body.password, body.role)
    if user is None:
        raise AuthenticationError(body.email)
    logger.info("User logged in", extra={"user_id": user.id, "role": user.role})
    return LoginResponse(
        user=UserResponse.model_validate(user),
        token=secrets.token_urlsafe(24),
    )
