"""Dashboard view-model: the progress list, the add/update form and logout.

Failed calls never propagate out of the dashboard; the error text is kept in
``error`` for the view to render.
"""

from client.api import ApiError, TrackerApiClient


def completion_percentage(solved: int, total: int) -> float:
    return round(solved / total * 100, 1) if total > 0 else 0.0


class Dashboard:
    def __init__(self, client: TrackerApiClient):
        self.client = client
        self.entries: list[dict] = []
        self.error = ""

    @property
    def username(self) -> str | None:
        return self.client.session.username

    def refresh(self) -> bool:
        try:
            self.entries = self.client.list_progress()
        except ApiError:
            self.error = "Failed to load progress data"
            return False
        return True

    def add(self, platform: str, solved: str | int, total: str | int) -> bool:
        self.error = ""
        try:
            solved_count, total_count = int(solved), int(total)
        except (TypeError, ValueError):
            self.error = "Problem counts must be whole numbers"
            return False

        try:
            self.client.save_progress(platform, solved_count, total_count)
        except ApiError as exc:
            self.error = exc.message
            return False
        return self.refresh()

    def delete(self, progress_id: int) -> bool:
        try:
            self.client.delete_progress(progress_id)
        except ApiError:
            self.error = "Failed to delete progress"
            return False
        return self.refresh()

    def logout(self) -> None:
        self.client.session.logout()
        self.entries = []
        self.error = ""
