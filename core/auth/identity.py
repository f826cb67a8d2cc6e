"""Caller identity for cart endpoints."""
from fastapi import Header, HTTPException
from pydantic import BaseModel, Field

from core.errors import ERROR_UNAUTHORIZED
from core.logging import get_logger

logger = get_logger(__name__)


class CartUser(BaseModel):
    """Already-authenticated caller. Cart operations take `id` and nothing else."""
    id: int = Field(gt=0)


async def verify_cart_user(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
) -> CartUser:
    """
    Resolve the caller from the `X-User-Id` header set by the upstream gateway.

    A missing or malformed id is rejected here and never reaches the cart manager.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    try:
        user_id = int(x_user_id.strip())
    except ValueError:
        logger.warning("Rejected non-numeric X-User-Id header")
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    if user_id <= 0:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    return CartUser(id=user_id)
