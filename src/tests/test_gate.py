from __future__ import annotations

import pytest

from ownergate.gate import (
    DENIED_SUBMIT_MESSAGE,
    FAIL_OPEN_ON_UNKNOWN,
    UNKNOWN_SUBMIT_MESSAGE,
    SubmitGate,
)
from ownergate.models import ExtensionState, OwnershipStatus


@pytest.mark.parametrize(
    ("status", "allowed"),
    [
        (OwnershipStatus.APPROVED, True),
        (OwnershipStatus.UNKNOWN, True),
        (OwnershipStatus.DENIED, False),
    ],
)
def test_can_submit_blocks_only_denied(status, allowed) -> None:
    alerts: list[str] = []
    gate = SubmitGate(alert=alerts.append)

    assert gate.can_submit(ExtensionState(current_status=status)) is allowed
    assert alerts == ([] if allowed else [DENIED_SUBMIT_MESSAGE])


def test_denied_message_text() -> None:
    assert DENIED_SUBMIT_MESSAGE == (
        "You are not a module owner for this patch set. Submit is disabled."
    )


def test_default_policy_is_fail_open() -> None:
    assert FAIL_OPEN_ON_UNKNOWN is True
    assert SubmitGate(alert=lambda _message: None).fail_open is True


def test_fail_closed_policy_blocks_unknown() -> None:
    alerts: list[str] = []
    gate = SubmitGate(alert=alerts.append, fail_open=False)

    assert gate.can_submit(ExtensionState()) is False
    assert alerts == [UNKNOWN_SUBMIT_MESSAGE]
    assert gate.can_submit(ExtensionState(current_status=OwnershipStatus.APPROVED))
