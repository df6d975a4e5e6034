from fastapi import APIRouter

from helpdesk.core.modules.user.models import UserView
from helpdesk.errors import UnauthorizedError
from helpdesk.web.deps import AppDep, SessionDep
from helpdesk.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the profile of the user behind the session cookie.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_profile(app: AppDep, session: SessionDep) -> UserView:
    user = await app.get_current_user(session)
    if user is None:
        raise UnauthorizedError
    return user
