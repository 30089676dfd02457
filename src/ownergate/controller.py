#! /bin/env python3
from __future__ import annotations

import asyncio
import logging

from ownergate.exceptions import HostServiceError, StatusLookupError
from ownergate.gate import SubmitGate
from ownergate.models import (
    ControllerPhase,
    ExtensionState,
    OwnershipStatus,
    RevisionRef,
)
from ownergate.renderer import AnnotationRenderer
from ownergate.resolver import StatusResolver
from ownergate.variants import GateVariant

logger: logging.Logger = logging.getLogger(__name__)


class ExtensionController(object):
    """Wire the host's change-screen events to the ownership gate.

    ``on_revision_displayed`` and ``on_submit_attempted`` are the two host
    event handlers. Lookups run on the caller's event loop; every lookup
    carries a request token and only the newest one may write to ``state``.
    """

    state: ExtensionState
    variant: GateVariant
    resolver: StatusResolver
    renderer: AnnotationRenderer
    gate: SubmitGate

    def __init__(
        self,
        variant: GateVariant,
        resolver: StatusResolver,
        renderer: AnnotationRenderer,
        gate: SubmitGate,
        state: ExtensionState | None = None,
        discard_stale: bool = True,
    ) -> None:
        self.variant = variant
        self.resolver = resolver
        self.renderer = renderer
        self.gate = gate
        self.state = state if state is not None else ExtensionState()
        self.discard_stale = discard_stale
        self.pending: asyncio.Task | None = None

    def on_revision_displayed(
        self, change_number: int, revision_number: int
    ) -> asyncio.Task | None:
        """Start resolving ownership for a newly displayed revision.

        Must be called from a running event loop. Returns the scheduled
        lookup task, or ``None`` when nobody is logged in.
        """
        if not self.resolver.should_resolve():
            logger.debug("No user logged in, ownership gate stays idle")
            return None

        revision = RevisionRef(change_number, revision_number)
        token = self._begin(revision)
        self.pending = asyncio.get_running_loop().create_task(
            self._resolve(revision, token)
        )
        return self.pending

    async def refresh(
        self, change_number: int, revision_number: int
    ) -> OwnershipStatus:
        """Resolve ownership for a revision and wait for the result."""
        if not self.resolver.should_resolve():
            logger.debug("No user logged in, ownership gate stays idle")
            return self.state.current_status

        revision = RevisionRef(change_number, revision_number)
        await self._resolve(revision, self._begin(revision))
        return self.state.current_status

    def on_submit_attempted(self, change_number: int, revision_number: int) -> bool:
        return self.gate.can_submit(self.state)

    def _begin(self, revision: RevisionRef) -> int:
        self.state.request_token += 1
        self.state.revision = revision
        self.state.phase = ControllerPhase.RESOLVING
        self.renderer.clear()
        return self.state.request_token

    async def _resolve(self, revision: RevisionRef, token: int) -> None:
        try:
            status = await self.resolver.resolve(revision, self.variant.endpoint_suffix)
        except StatusLookupError as e:
            logger.warning(f"Could not resolve ownership for {revision}: {e}")
            return
        except Exception:
            logger.exception(f"Unexpected error resolving ownership for {revision}")
            return

        if self.discard_stale and token != self.state.request_token:
            logger.debug(
                f"Discarding {status.value} for {revision}, superseded by "
                f"{self.state.revision}"
            )
            return

        logger.info(f"{self.variant.name}: {status.value} for {revision}")
        self.state.current_status = status
        self.state.phase = ControllerPhase.RESOLVED

        if status is OwnershipStatus.UNKNOWN:
            return
        try:
            self.renderer.render(status, self.variant)
        except HostServiceError as e:
            logger.warning(f"Could not show ownership label: {e}")
        except Exception:
            logger.exception(f"Unexpected error showing ownership label for {revision}")
