"""Minimal router state: where the user is and where they were sent."""

import structlog

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"


class Navigator:
    def __init__(self, current_path: str = "/"):
        self.current_path = current_path
        self.state: dict | None = None
        self.history: list[str] = [current_path]

    def navigate(self, path: str, state: dict | None = None) -> None:
        logger.debug("navigate", from_path=self.current_path, to_path=path)
        self.current_path = path
        self.state = state
        self.history.append(path)

    @property
    def on_auth_page(self) -> bool:
        return self.current_path in (LOGIN_PATH, REGISTER_PATH)
