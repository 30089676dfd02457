from __future__ import annotations

import logging
from typing import Any

import requests

from ownergate.exceptions import StatusLookupError
from ownergate.host import CurrentUser, HttpGet
from ownergate.internal_config import ANONYMOUS_ACCOUNT_ID, DEFAULT_PLUGIN_NAME
from ownergate.models import AccountInfo, OwnershipStatus, RevisionRef

logger: logging.Logger = logging.getLogger(__name__)

_TOKENS = {
    "APPROVED": OwnershipStatus.APPROVED,
    "DENIED": OwnershipStatus.DENIED,
}


def build_lookup_path(
    revision: RevisionRef, plugin_name: str, endpoint_suffix: str
) -> str:
    return (
        f"changes/{revision.change_number}"
        f"/revisions/{revision.revision_number}"
        f"/{plugin_name}~{endpoint_suffix}"
    )


def parse_status_token(token: Any) -> OwnershipStatus:
    """Map the server's bare status token; the server's NONE and junk are unknown."""
    if not isinstance(token, str):
        return OwnershipStatus.UNKNOWN
    return _TOKENS.get(token, OwnershipStatus.UNKNOWN)


def is_anonymous(user: AccountInfo | None) -> bool:
    return user is None or user.account_id == ANONYMOUS_ACCOUNT_ID


class StatusResolver(object):
    """Ask the ownership endpoint whether the current user may submit a revision."""

    def __init__(
        self,
        http_get: HttpGet,
        current_user: CurrentUser,
        plugin_name: str = DEFAULT_PLUGIN_NAME,
    ) -> None:
        self.http_get = http_get
        self.current_user = current_user
        self.plugin_name = plugin_name

    def should_resolve(self) -> bool:
        return not is_anonymous(self.current_user())

    async def resolve(
        self, revision: RevisionRef, endpoint_suffix: str
    ) -> OwnershipStatus:
        if not self.should_resolve():
            logger.debug("No user logged in, skipping ownership lookup")
            return OwnershipStatus.UNKNOWN

        path = build_lookup_path(revision, self.plugin_name, endpoint_suffix)
        try:
            body = await self.http_get(path)
        except (requests.RequestException, OSError) as e:
            raise StatusLookupError(f"Ownership lookup {path} failed: {e}") from e

        status = parse_status_token(body)
        if status is OwnershipStatus.UNKNOWN and body not in (None, "NONE"):
            logger.debug(f"Unexpected ownership token {body!r} from {path}")
        return status
