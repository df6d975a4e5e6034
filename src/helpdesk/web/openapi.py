from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from helpdesk.core.modules.session.models import AUTH_COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Helpdesk API",
            version="0.1.0",
            summary="Internal support ticketing with cookie sessions",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "AuthTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": AUTH_COOKIE_NAME,
                "description": "Signed session token set by register/login",
            },
        }
        openapi_schema["security"] = [{"AuthTokenCookie": []}]

        # Endpoints that need no session
        public_endpoints = {
            ("POST", "/api/v1/auth/register"),
            ("POST", "/api/v1/auth/login"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Authentication required", "type": "unauthorized"},
                {"message": "Ticket not found", "type": "not_found"},
            ]
        }
    }
