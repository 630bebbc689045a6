"""HTTP client for the MentorHub API."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.client.forms import FormValidationError
from app.client.session import SessionContext
from app.core.config import settings

logger = logging.getLogger("mentorhub.client")

MIN_PASSWORD_LENGTH = 6


class PortalClientError(Exception):
    """A request failed; ``message`` is the server's error text when it sent one."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PortalClient:
    def __init__(
        self,
        base_url: str | None = None,
        session: SessionContext | None = None,
        http: httpx.Client | None = None,
    ):
        self.session = session if session is not None else SessionContext()
        self.http = http or httpx.Client(base_url=base_url or settings.api_base_url)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        protected: bool = False,
    ) -> httpx.Response:
        headers = self.session.auth_headers() if protected else {}
        try:
            response = self.http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise PortalClientError(fallback) from e

        if response.is_success:
            return response

        try:
            message = response.json().get("error") or fallback
        except (ValueError, AttributeError):
            message = fallback
        if protected and response.status_code == 401:
            # Token rejected: the caller has to sign in again.
            self.session.clear()
        raise PortalClientError(message, status_code=response.status_code)

    # ---- Mentor authentication ----

    def signup(
        self,
        email: str,
        password: str,
        confirm_password: str,
        name: str,
        department: str = "",
        contact: str = "",
    ) -> dict[str, Any]:
        if password != confirm_password:
            raise FormValidationError("Passwords do not match", fields=["confirmPassword"])
        if len(password) < MIN_PASSWORD_LENGTH:
            raise FormValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long", fields=["password"]
            )
        body = {"email": email, "password": password, "name": name, "department": department, "contact": contact}
        return self._request("POST", "/signup", "Signup failed", json=body).json()

    def signin(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/signin", "Login failed", json={"email": email, "password": password}).json()
        self.session.save(data["user"], data["access_token"])
        return data

    def signout(self) -> None:
        self.session.clear()

    # ---- Mentee forms ----

    def submit_form(self, kind: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/mentee/{kind}", f"Failed to submit {kind} form", json=fields).json()

    # ---- Mentor dashboard ----

    def list_mentees(self, search: str | None = None) -> list[dict[str, Any]]:
        params = {"search": search} if search else None
        response = self._request("GET", "/mentor/mentees", "Failed to fetch mentees", params=params, protected=True)
        return response.json().get("mentees", [])

    def get_mentee(self, prn: str) -> dict[str, Any]:
        path = f"/mentor/mentee/{quote(prn, safe='')}"
        return self._request("GET", path, "Failed to fetch mentee details", protected=True).json()

    def dashboard(self) -> dict[str, Any]:
        return self._request("GET", "/mentor/dashboard", "Failed to fetch dashboard data", protected=True).json()

    def stats(self) -> dict[str, int]:
        return self._request("GET", "/mentor/stats", "Failed to fetch mentee statistics", protected=True).json()

    def export_mentees(self, search: str | None = None) -> str:
        params = {"search": search} if search else None
        return self._request(
            "GET", "/mentor/mentees/export", "Failed to export mentees data", params=params, protected=True
        ).text

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health", "Service unavailable").json()
