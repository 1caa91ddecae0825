"""Request authentication for the API: bearer token → current user."""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.access.roles import CurrentUser, current_user
from storefront.utils.logging import add_context

bearer = HTTPBearer(auto_error=False)


async def get_current_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> CurrentUser:
    user = current_user(credentials.credentials if credentials else None)
    if user is None:
        raise HTTPException(status_code=401, detail="Please login first")
    add_context(user_id=user.id)
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
