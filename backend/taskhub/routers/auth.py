import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.security.utils import get_authorization_scheme_param

from taskhub.core.errors import AuthError
from taskhub.core.security import TokenService
from taskhub.dependencies import get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

async def require_token(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Reject requests without a valid bearer token; expose its claims otherwise."""
    # The scheme word is not checked: "<anything> <token>" passes the token on.
    _, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if not token:
        logger.debug("Rejected request to %s: no token", request.url.path)
        raise AuthError(status.HTTP_401_UNAUTHORIZED)

    try:
        claims = tokens.verify(token)
    except AuthError:
        logger.debug("Rejected request to %s: invalid token", request.url.path)
        raise

    request.state.claims = claims
    return claims

@router.get("/claims")
async def read_claims(claims: Dict[str, Any] = Depends(require_token)):
    """Return the decoded claims of the presented token"""
    return claims
