"""FastAPI dependencies resolving the bearer credential to a ``Principal``."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity.domain import identity
from identity.user.credentials import Principal, verify_credential
from shared.errors import Forbidden, Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


async def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None:
        raise Unauthorized("Not authorized, no token")
    # Routes of every context authenticate through here
    with identity.domain_context():
        return verify_credential(credentials.credentials)


async def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal
