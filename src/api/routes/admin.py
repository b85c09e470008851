"""
Admin API Routes

Endpoints restricted to users with the admin role.
Authentication is via bearer access token plus role membership.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.utils.role_auth import require_roles
from src.depends import CurrentUser
from src.domain.entities import UserRole

router = APIRouter(prefix="/admin", tags=["Admin"])


class PingResponse(BaseModel):
    message: str
    email: str


@router.get("/ping", status_code=status.HTTP_200_OK, response_model=PingResponse)
async def ping(current_user: CurrentUser = Depends(require_roles(UserRole.admin))):
    """
    Admin Health Check

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
        - 403 Forbidden: Role is not admin
    """
    return PingResponse(message="pong", email=current_user.email)
