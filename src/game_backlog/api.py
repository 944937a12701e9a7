"""
Request surface for the library.

Framework-free handlers for the status-update, sync and
current-playing endpoints. Each returns an APIResponse carrying the
HTTP status code and JSON body; a web framework only has to pass
the authenticated user id and the request body through.
"""

import json
from typing import Any

from pydantic import BaseModel

from game_backlog.errors import LibraryError, UnauthenticatedError, ValidationError
from game_backlog.ingestion.orchestrator import LibrarySyncService
from game_backlog.library.status import StatusService
from game_backlog.logger import get_logger, log_context

logger = get_logger(__name__, component="api")


class APIResponse(BaseModel):
    """HTTP status code and JSON body of a handled request."""

    status_code: int
    body: dict[str, Any]


def _error(status_code: int, message: str) -> APIResponse:
    return APIResponse(status_code=status_code, body={"error": message})


def _require_user(user_id: str | None) -> str:
    if not user_id:
        raise UnauthenticatedError()
    return user_id


def _parse_body(body: Any) -> dict[str, Any] | None:
    """Decode a request body; None when it is not a JSON object."""
    if isinstance(body, (str, bytes, bytearray)):
        try:
            body = json.loads(body)
        except ValueError:
            return None
    return body if isinstance(body, dict) else None


def _to_response(e: LibraryError) -> APIResponse:
    if isinstance(e, UnauthenticatedError):
        return _error(401, e.code)
    if isinstance(e, ValidationError):
        return _error(400, e.code)
    logger.error("Request failed", error=str(e), code=e.code)
    return _error(500, str(e))


class LibraryAPI:
    """
    Handlers for the library endpoints.

    Authentication is checked before any body parsing or core call.
    """

    def __init__(self, status_service: StatusService, sync_service: LibrarySyncService) -> None:
        self._status_service = status_service
        self._sync_service = sync_service

    def post_status_update(self, user_id: str | None, body: Any) -> APIResponse:
        """POST status-update ``{appId, status}``."""
        try:
            user = _require_user(user_id)
            payload = _parse_body(body)
            if payload is None:
                return _error(400, "Invalid JSON")
            with log_context(user_id=user, app_id=payload.get("appId")):
                self._status_service.set_status(user, payload.get("appId"), payload.get("status"))
        except LibraryError as e:
            return _to_response(e)
        return APIResponse(status_code=200, body={"success": True})

    async def post_sync(self, user_id: str | None, body: Any) -> APIResponse:
        """POST sync ``{appId}``."""
        try:
            user = _require_user(user_id)
            payload = _parse_body(body)
            if payload is None:
                return _error(400, "Invalid JSON")
            with log_context(user_id=user, app_id=payload.get("appId")):
                result = await self._sync_service.sync(user, payload.get("appId"))
        except LibraryError as e:
            return _to_response(e)

        return APIResponse(
            status_code=200,
            body={
                "success": True,
                "skipped": result.skipped,
                "reason": result.reason.value if result.reason else None,
                "record": result.record.model_dump(mode="json") if result.record else None,
            },
        )

    def get_current_playing(self, user_id: str | None) -> APIResponse:
        """GET current-playing."""
        try:
            user = _require_user(user_id)
            item = self._status_service.get_currently_playing(user)
        except LibraryError as e:
            return _to_response(e)

        game = None
        if item is not None:
            game = {
                "app_id": item.app_id,
                "name": item.name,
                "header_image": item.header_image,
                "main_story_hours": item.main_story_hours,
            }
        return APIResponse(status_code=200, body={"game": game})
