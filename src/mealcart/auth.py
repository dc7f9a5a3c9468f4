"""Caller identity for API requests.

Token verification happens upstream; this module only reads the user id that
the auth layer forwards in a request header.
"""

from fastapi import HTTPException, Request, status

from mealcart.config import get_settings
from mealcart.logging_config import set_context


async def get_current_user_id(request: Request) -> str:
    """Dependency returning the authenticated user id, or 401 if absent."""
    header = get_settings().user_id_header
    user_id = (request.headers.get(header) or "").strip()

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    set_context(user_id=user_id)
    return user_id


def ensure_owner(resource_owner: str, user_id: str, resource: str) -> None:
    """Raise 403 unless ``user_id`` owns the resource."""
    if resource_owner != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied: you can only access your own {resource}",
        )
