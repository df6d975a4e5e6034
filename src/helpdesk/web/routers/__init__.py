from helpdesk.web.routers.auth import router as auth_router
from helpdesk.web.routers.profile import router as profile_router
from helpdesk.web.routers.tickets import router as tickets_router

__all__ = [
    "auth_router",
    "profile_router",
    "tickets_router",
]
