"""HTTP tests for the auth and ticket endpoints."""

import json

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from helpdesk.app import App
from helpdesk.errors import UnauthorizedError, ValidationError
from helpdesk.web.error_handlers import user_error_handler
from helpdesk.web.server import create_fastapi_app


@pytest.fixture
def client(database, config):
    with TestClient(create_fastapi_app(App(config), config)) as test_client:
        yield test_client


def register(client, email="ada@example.com"):
    response = client.post("/api/v1/auth/register", data={"name": "Ada", "email": email, "password": "secret123"})
    assert response.status_code == 200
    return response


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_unhealthy_when_database_down(self, client, database):
        database.error = ServerSelectionTimeoutError("no servers")
        response = client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy"}


class TestAuthRoutes:
    def test_register_sets_session_cookie(self, client):
        response = register(client)

        assert response.json() == {"success": True, "message": "Registration successful"}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("auth-token=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=604800" in set_cookie
        assert "Path=/" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Secure" not in set_cookie

    def test_register_missing_fields(self, client):
        response = client.post("/api/v1/auth/register", data={"name": "Ada"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "All fields are required"}

    def test_register_duplicate(self, client):
        register(client)
        response = client.post(
            "/api/v1/auth/register", data={"name": "Ada", "email": "ada@example.com", "password": "secret123"}
        )
        assert response.json() == {"success": False, "message": "User already exists"}

    def test_profile_requires_session(self, client):
        response = client.get("/api/v1/profile")

        assert response.status_code == 401
        assert response.json()["type"] == "unauthorized"

    def test_profile_after_register(self, client):
        register(client)
        response = client.get("/api/v1/profile")

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_logout_then_login(self, client):
        register(client)

        logout = client.post("/api/v1/auth/logout")
        assert logout.json() == {"success": True, "message": "Logout successful"}
        assert client.get("/api/v1/profile").status_code == 401

        login = client.post("/api/v1/auth/login", data={"email": "ada@example.com", "password": "secret123"})
        assert login.json()["success"] is True
        assert client.get("/api/v1/profile").status_code == 200

    def test_tampered_cookie_is_logged_out(self, client):
        register(client)
        token = client.cookies.get("auth-token")
        client.cookies.clear()
        client.cookies.set("auth-token", token + "x")

        assert client.get("/api/v1/profile").status_code == 401


class TestTicketRoutes:
    def test_create_and_list_newest_first(self, client):
        register(client)
        client.post("/api/v1/tickets", data={"subject": "Old", "description": "first", "priority": "low"})
        created = client.post(
            "/api/v1/tickets", data={"subject": "Printer down", "description": "no toner", "priority": "high"}
        )

        assert created.json() == {"success": True, "message": "Ticket created successfully"}
        tickets = client.get("/api/v1/tickets").json()
        assert [t["subject"] for t in tickets] == ["Printer down", "Old"]
        assert tickets[0]["id"] == 2

    def test_create_requires_login(self, client):
        response = client.post("/api/v1/tickets", data={"subject": "x", "description": "y", "priority": "z"})
        assert response.json() == {"success": False, "message": "You must be logged in to create a ticket"}

    def test_create_missing_fields(self, client):
        register(client)
        response = client.post("/api/v1/tickets", data={"subject": "Printer down"})
        assert response.json() == {"success": False, "message": "All fields are required"}

    def test_listing_empty_when_logged_out(self, client):
        assert client.get("/api/v1/tickets").json() == []

    def test_listing_etag_revalidation(self, client):
        """Test that an unchanged listing answers 304 and a new ticket invalidates it."""
        register(client)
        first = client.get("/api/v1/tickets")
        etag = first.headers["etag"]

        unchanged = client.get("/api/v1/tickets", headers={"If-None-Match": etag})
        assert unchanged.status_code == 304

        client.post("/api/v1/tickets", data={"subject": "Printer down", "description": "no toner", "priority": "high"})
        changed = client.get("/api/v1/tickets", headers={"If-None-Match": etag})
        assert changed.status_code == 200
        assert changed.headers["etag"] != etag
        assert len(changed.json()) == 1

    @pytest.mark.parametrize("header", ["*", "W/\"tickets-0-other\", {etag}", "{etag}, W/\"tickets-9-other\""])
    def test_listing_etag_matches_lists_and_wildcard(self, client, header):
        register(client)
        etag = client.get("/api/v1/tickets").headers["etag"]

        response = client.get("/api/v1/tickets", headers={"If-None-Match": header.format(etag=etag)})

        assert response.status_code == 304

    def test_listing_etag_mismatch_in_list(self, client):
        register(client)
        client.get("/api/v1/tickets")

        response = client.get("/api/v1/tickets", headers={"If-None-Match": "W/\"tickets-0-a\", W/\"tickets-0-b\""})

        assert response.status_code == 200

    def test_get_ticket(self, client):
        register(client)
        client.post("/api/v1/tickets", data={"subject": "Printer down", "description": "no toner", "priority": "high"})

        response = client.get("/api/v1/tickets/1")

        assert response.status_code == 200
        assert response.json()["priority"] == "high"

    @pytest.mark.parametrize("ticket_id", ["999", "abc"])
    def test_get_unknown_ticket_is_404(self, client, ticket_id):
        response = client.get(f"/api/v1/tickets/{ticket_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Ticket not found", "type": "not_found"}


class TestProductionCookie:
    def test_secure_flag_in_production(self, database, config):
        production = config.model_copy(update={"environment": "production"})
        # base_url https so the client keeps sending the Secure cookie
        with TestClient(create_fastapi_app(App(production), production), base_url="https://testserver") as client:
            response = register(client)
            assert "Secure" in response.headers["set-cookie"]
            assert client.get("/api/v1/profile").status_code == 200


class TestErrorHandlers:
    async def test_unknown_user_error_is_bad_request(self):
        response = await user_error_handler(None, ValidationError("All fields are required"))

        assert response.status_code == 400
        assert json.loads(response.body) == {"message": "All fields are required", "type": "bad_request"}

    async def test_unauthorized_maps_to_401(self):
        response = await user_error_handler(None, UnauthorizedError())
        assert response.status_code == 401
