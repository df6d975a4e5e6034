from typing import Annotated

from fastapi import APIRouter, Form

from helpdesk.core.results import ActionResult
from helpdesk.web.deps import AppDep, SessionDep

router = APIRouter(tags=["auth"])


@router.post(
    "/auth/register",
    summary="Register user",
    description="Create an account from a form submission and start a session cookie.",
    operation_id="register",
    responses={200: {"description": "Outcome of the registration, see `success`"}},
)
async def register(
    app: AppDep,
    session: SessionDep,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> ActionResult:
    return await app.register_user(session, name, email, password)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Check email and password and start a session cookie.",
    operation_id="login",
    responses={200: {"description": "Outcome of the login, see `success`"}},
)
async def login(
    app: AppDep,
    session: SessionDep,
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> ActionResult:
    return await app.login_user(session, email, password)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Remove the session cookie. Always reports success.",
    operation_id="logout",
    responses={200: {"description": "Logged out"}},
)
async def logout(app: AppDep, session: SessionDep) -> ActionResult:
    return await app.logout_user(session)
