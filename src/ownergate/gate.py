from __future__ import annotations

import logging

from ownergate.host import Alert
from ownergate.models import ExtensionState, OwnershipStatus

logger: logging.Logger = logging.getLogger(__name__)

# Unresolved ownership never blocks submission. Flip to fail closed.
FAIL_OPEN_ON_UNKNOWN = True

DENIED_SUBMIT_MESSAGE = (
    "You are not a module owner for this patch set. Submit is disabled."
)
UNKNOWN_SUBMIT_MESSAGE = (
    "Module ownership could not be determined. Submit is disabled."
)


class SubmitGate(object):
    """Veto a submit attempt from the cached ownership status."""

    def __init__(
        self,
        alert: Alert,
        fail_open: bool = FAIL_OPEN_ON_UNKNOWN,
        unknown_message: str = UNKNOWN_SUBMIT_MESSAGE,
    ) -> None:
        self.alert = alert
        self.fail_open = fail_open
        self.unknown_message = unknown_message

    def can_submit(self, state: ExtensionState) -> bool:
        status = state.current_status
        if status is OwnershipStatus.DENIED:
            logger.info(f"Blocking submit of {state.revision}: not an owner")
            self.alert(DENIED_SUBMIT_MESSAGE)
            return False
        if status is OwnershipStatus.UNKNOWN and not self.fail_open:
            logger.info(f"Blocking submit of {state.revision}: ownership unknown")
            self.alert(self.unknown_message)
            return False
        return True
