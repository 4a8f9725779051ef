"""Session Activity Tracker"""

from typing import Any

import httpx
import pybreaker

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class SessionTracker:
    """
    Reports one editing session's activity to the activity-log collaborator.

    Constructed once per session and passed to whatever emits events. The
    session id is instance state set by ``start()``. Every call goes through
    a circuit breaker and failures are logged and swallowed: tracking must
    never interrupt editing.
    """

    def __init__(
        self,
        base_url: str,
        user_id: str,
        username: str,
        timeout: float = 5.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize tracker with circuit breaker.

        Args:
            base_url: Base URL of the activity-log service
            user_id: Identity of the editing user
            username: Display name sent with the session
            timeout: Request timeout in seconds
            http_client: Optional preconfigured client
        """
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.username = username
        self.session_id: str | None = None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=5,
            reset_timeout=30,
            name="activity-http",
            listeners=[BreakerListener()],
        )

    @property
    def active(self) -> bool:
        return self.session_id is not None

    def start(self) -> str | None:
        """
        Open a session with the collaborator.

        Returns:
            The session id, or None if the collaborator was unreachable or
            its reply carried no id
        """
        data = self._post(
            "/api/session/start",
            {"userId": self.user_id, "username": self.username},
            "session_start",
        )
        session_id = data.get("id") if isinstance(data, dict) else None
        if not session_id:
            if data is not None:
                logger.warning("session_start_missing_id")
            return None

        self.session_id = str(session_id)
        logger.info("session_started", session_id=self.session_id)
        return self.session_id

    def end(self) -> None:
        """Close the current session, if any."""
        if not self._require_session("session_end"):
            return
        self._post(f"/api/session/{self.session_id}/end", None, "session_end")
        logger.info("session_ended", session_id=self.session_id)
        self.session_id = None

    def log_activity(
        self,
        activity_type: str,
        project_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Record an editing event (component_add, layout_change, ...)."""
        if not self._require_session("log_activity"):
            return
        body: dict[str, Any] = {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "activityType": activity_type,
            "details": details or {},
        }
        if project_id is not None:
            body["projectId"] = project_id
        self._post("/api/activity/log", body, "log_activity")

    def log_code_generation(
        self,
        layout_snapshot: dict[str, Any],
        generated_code: str,
        generation_type: str,
        project_id: int | None = None,
    ) -> None:
        """Record one AI generation or optimization result."""
        if not self._require_session("log_code_generation"):
            return
        body: dict[str, Any] = {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "layoutSnapshot": layout_snapshot,
            "generatedCode": generated_code,
            "generationType": generation_type,
        }
        if project_id is not None:
            body["projectId"] = project_id
        self._post("/api/code-generation/log", body, "log_code_generation")

    def log_component_usage(
        self,
        component_type: str,
        action: str,
        project_id: int | None = None,
    ) -> None:
        """Record that a component kind was added, modified or removed."""
        if not self._require_session("log_component_usage"):
            return
        body: dict[str, Any] = {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "componentType": component_type,
            "action": action,
        }
        if project_id is not None:
            body["projectId"] = project_id
        self._post("/api/component-usage/log", body, "log_component_usage")

    def _require_session(self, operation: str) -> bool:
        if self.session_id is None:
            logger.warning("no_active_session", operation=operation)
            return False
        return True

    def _post(self, path: str, body: dict[str, Any] | None, event: str) -> Any | None:
        url = f"{self.base_url}{path}"
        try:

            def _make_request():
                response = self._client.post(url, json=body)
                response.raise_for_status()
                return response

            response = self._breaker.call(_make_request)
            if not response.content:
                return {}
            return response.json()

        except pybreaker.CircuitBreakerError:
            logger.error(f"{event}_failed", error="Circuit breaker open - activity service unavailable")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"{event}_http_error", error=str(e))
            return None
        except ValueError as e:
            logger.warning(f"{event}_invalid_response", error=str(e))
            return None

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "SessionTracker":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
