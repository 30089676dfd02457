from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OwnershipStatus(str, Enum):
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    UNKNOWN = "UNKNOWN"


class ControllerPhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class RevisionRef:
    change_number: int
    revision_number: int


@dataclass(frozen=True)
class AccountInfo:
    account_id: int
    username: str = ""


@dataclass(frozen=True)
class LabelNode:
    html: str
    css_class: str
    text: str
    variant_name: str = ""


@dataclass
class ExtensionState:
    """Per-extension cache of the last requested revision's ownership status.

    Only the controller writes to it; renderer and gate read it.
    """

    current_status: OwnershipStatus = OwnershipStatus.UNKNOWN
    phase: ControllerPhase = ControllerPhase.IDLE
    revision: RevisionRef | None = None
    request_token: int = 0
