from typing import Annotated, cast

from fastapi import Depends, Request, Response

from helpdesk.app import App
from helpdesk.core.modules.session.cookie import SessionCookie
from helpdesk.web.cookies import RequestCookies


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_cookie(request: Request, response: Response, app: Annotated[App, Depends(get_app)]) -> SessionCookie:
    """Session cookie carrier bound to the current request and response."""
    return SessionCookie(RequestCookies(request, response), secure=app.config.is_production)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionDep = Annotated[SessionCookie, Depends(get_session_cookie)]
