import logging
from datetime import datetime
from typing import Dict, Optional, Set

from rangecopy.core.exceptions import InvalidTransitionError
from rangecopy.models import CopyStatus


class CopyStateMachine:
    """
    "Dørmand" for status-overgange i en enkelt range copy.

    Den ENESTE måde at ændre status på er via transition(), som:
    1. Validerer overgangen.
    2. Gemmer den nye status og evt. fejl.
    3. Logger overgangen.

    Unvalidated -> Validated -> Copying -> {Completed | Failed}
    """

    _transitions: Dict[CopyStatus, Set[CopyStatus]] = {
        CopyStatus.UNVALIDATED: {
            CopyStatus.VALIDATED,
            CopyStatus.FAILED,
        },
        CopyStatus.VALIDATED: {
            CopyStatus.COPYING,
            CopyStatus.FAILED,
        },
        CopyStatus.COPYING: {
            CopyStatus.COMPLETED,
            CopyStatus.FAILED,
        },
        CopyStatus.COMPLETED: set(),
        CopyStatus.FAILED: set(),
    }

    def __init__(self, description: str):
        self.description = description
        self.status = CopyStatus.UNVALIDATED
        self.error: Optional[BaseException] = None
        self.changed_at = datetime.now()

    @property
    def is_terminal(self) -> bool:
        return not self._transitions[self.status]

    def can_transition(self, new_status: CopyStatus) -> bool:
        return new_status in self._transitions[self.status]

    def transition(
        self,
        new_status: CopyStatus,
        *,
        error: Optional[BaseException] = None,
    ) -> CopyStatus:
        """
        Udfører en status-overgang.

        Raises:
            InvalidTransitionError: Hvis overgangen ikke er tilladt.
        """
        old_status = self.status
        if not self.can_transition(new_status):
            raise InvalidTransitionError(
                self.description, old_status.value, new_status.value
            )

        logging.debug(
            f"Transition: {self.description} | {old_status.value} -> {new_status.value}"
        )
        self.status = new_status
        self.changed_at = datetime.now()
        if new_status == CopyStatus.FAILED:
            self.error = error
        return new_status

    def fail(self, error: BaseException) -> None:
        """Move to FAILED unless the operation already reached a terminal state."""
        if self.is_terminal:
            return
        self.transition(CopyStatus.FAILED, error=error)
