import logging

import httpx

from client.session import ClientSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """A failed API call; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class TrackerApiClient:
    def __init__(
        self,
        session: ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, fallback: str, json: dict | None = None):
        try:
            response = self._http.request(method, path, json=json, headers=self.session.auth_headers())
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(fallback) from exc

        if response.is_error:
            raise ApiError(_server_message(response) or fallback, response.status_code)
        return response.json()

    def register(self, username: str, email: str, password: str) -> dict:
        data = self._request(
            "POST",
            "/auth/register",
            "Registration failed",
            json={"username": username, "email": email, "password": password},
        )
        self.session.login(data["token"], data["username"])
        return data

    def login(self, email: str, password: str) -> dict:
        data = self._request(
            "POST",
            "/auth/login",
            "Login failed",
            json={"email": email, "password": password},
        )
        self.session.login(data["token"], data["username"])
        return data

    def list_progress(self) -> list[dict]:
        return self._request("GET", "/progress", "Failed to load progress data")

    def save_progress(self, platform: str, problems_solved: int, total_problems: int) -> dict:
        data = self._request(
            "POST",
            "/progress",
            "Failed to add progress",
            json={
                "platform": platform.strip(),
                "problemsSolved": problems_solved,
                "totalProblems": total_problems,
            },
        )
        return data["progress"]

    def delete_progress(self, progress_id: int) -> None:
        self._request("DELETE", f"/progress/{progress_id}", "Failed to delete progress")
