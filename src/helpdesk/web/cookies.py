from typing import Literal, cast

from fastapi import Request, Response

SameSite = Literal["lax", "strict", "none"]


class RequestCookies:
    """Cookie store for one request: reads from the request, writes to the response."""

    def __init__(self, request: Request, response: Response) -> None:
        self._request = request
        self._response = response

    def get(self, name: str) -> str | None:
        return self._request.cookies.get(name)

    def set(self, name: str, value: str, *, max_age: int, path: str, secure: bool, httponly: bool, samesite: str) -> None:
        self._response.set_cookie(
            key=name,
            value=value,
            max_age=max_age,
            path=path,
            secure=secure,
            httponly=httponly,
            samesite=cast(SameSite, samesite),
        )

    def delete(self, name: str, *, path: str, secure: bool, httponly: bool, samesite: str) -> None:
        self._response.delete_cookie(
            key=name, path=path, secure=secure, httponly=httponly, samesite=cast(SameSite, samesite)
        )
