"""
Play status lifecycle.

Any status may move directly to any other. The one cross-item rule:
a user has at most one PLAYING item, so promoting an item to PLAYING
first demotes every other PLAYING item of that user to BACKLOG. The
demotion and the promotion are applied inside one repository
transaction.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from game_backlog.library.models import CatalogItem, PlayStatus
from game_backlog.library.validation import StatusUpdateCommand, validate_status_update
from game_backlog.logger import get_logger

if TYPE_CHECKING:
    from game_backlog.persistence.base import LibraryRepository


def requires_clearing_playing_games(status: PlayStatus | str) -> bool:
    """Return True if moving to ``status`` must demote other PLAYING items."""
    return status == PlayStatus.PLAYING


@dataclass(frozen=True)
class DemotePlaying:
    """Move every PLAYING item except ``exclude_app_id`` back to BACKLOG."""

    exclude_app_id: int


@dataclass(frozen=True)
class SetStatus:
    """Set the status of a single item."""

    app_id: int
    status: PlayStatus


StatusInstruction = DemotePlaying | SetStatus


class StatusLifecycle:
    """Plans the persistence instructions for a status change."""

    def plan(self, command: StatusUpdateCommand) -> list[StatusInstruction]:
        """
        Plan the instructions for a validated status update.

        Demotion, when needed, always precedes the target update.

        Args:
            command: Validated status update

        Returns:
            Ordered list of instructions
        """
        instructions: list[StatusInstruction] = []
        if requires_clearing_playing_games(command.status):
            instructions.append(DemotePlaying(exclude_app_id=command.app_id))
        instructions.append(SetStatus(app_id=command.app_id, status=command.status))
        return instructions


class StatusService:
    """
    Applies status changes through a LibraryRepository.

    Example:
        >>> service = StatusService(InMemoryLibraryRepository())
        >>> service.set_status("user-1", 730, "playing")
    """

    def __init__(
        self,
        repository: "LibraryRepository",
        *,
        lifecycle: StatusLifecycle | None = None,
    ) -> None:
        self._repository = repository
        self._lifecycle = lifecycle or StatusLifecycle()
        self._logger = get_logger(__name__, component="status")

    def set_status(self, user_id: str, app_id: Any, status: Any) -> StatusUpdateCommand:
        """
        Validate and apply a raw status update.

        Raises:
            ValidationError: app_id or status is invalid
            PersistenceError: the repository rejected a write
        """
        command = validate_status_update(app_id, status)
        self.apply(user_id, command)
        return command

    def apply(self, user_id: str, command: StatusUpdateCommand) -> None:
        """Apply a validated status update atomically."""
        instructions = self._lifecycle.plan(command)

        with self._repository.transaction(user_id) as unit:
            for instruction in instructions:
                if isinstance(instruction, DemotePlaying):
                    demoted = unit.bulk_demote(user_id, exclude_app_id=instruction.exclude_app_id)
                    if demoted:
                        self._logger.info(
                            "Demoted playing items",
                            user_id=user_id,
                            demoted=demoted,
                            promoted_app_id=instruction.exclude_app_id,
                        )
                else:
                    unit.update_status(user_id, instruction.app_id, instruction.status)

        self._logger.info(
            "Status updated",
            user_id=user_id,
            app_id=command.app_id,
            status=command.status.value,
        )

    def get_currently_playing(self, user_id: str) -> CatalogItem | None:
        return self._repository.get_currently_playing(user_id)
