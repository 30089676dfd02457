from ownergate.models import (
    AccountInfo,
    ControllerPhase,
    ExtensionState,
    OwnershipStatus,
    RevisionRef,
)

__all__ = [
    "AccountInfo",
    "ControllerPhase",
    "ExtensionState",
    "OwnershipStatus",
    "RevisionRef",
]
