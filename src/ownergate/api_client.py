#! /bin/env python3
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter, Retry

from ownergate.exceptions import HostServiceError
from ownergate.internal_config import (
    ANONYMOUS_ACCOUNT_ID,
    DEFAULT_USER_AGENT,
    HTTP_REQUEST_TIMEOUT_SECONDS,
    HTTP_RETRY_ALLOWED_METHODS,
    HTTP_RETRY_BACKOFF_FACTOR,
    HTTP_RETRY_STATUS_FORCELIST,
    HTTP_RETRY_TOTAL,
    XSSI_PREFIX,
)
from ownergate.models import AccountInfo

logger: logging.Logger = logging.getLogger(__name__)


def strip_xssi_prefix(text: str) -> str:
    if text.startswith(XSSI_PREFIX):
        return text[len(XSSI_PREFIX) :].lstrip("\r\n")
    return text


def parse_response_body(text: str) -> Any:
    """Decode a Gerrit REST response body, tolerating bare non-JSON tokens."""
    body = strip_xssi_prefix(text).strip()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body


class GerritRestClient(object):
    """Talk to the Gerrit REST API on behalf of the current user."""

    session: requests.Session
    base_url: str
    authenticated: bool

    def __init__(
        self,
        base_url: str,
        username: str = "",
        password: str = "",
        timeout: int = HTTP_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        retry_strategy = Retry(
            total=HTTP_RETRY_TOTAL,
            backoff_factor=HTTP_RETRY_BACKOFF_FACTOR,
            status_forcelist=HTTP_RETRY_STATUS_FORCELIST,
            allowed_methods=HTTP_RETRY_ALLOWED_METHODS,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session = requests.Session()
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers["User-Agent"] = DEFAULT_USER_AGENT
        self.session.headers["Accept"] = "application/json"
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.authenticated = bool(username and password)
        if self.authenticated:
            self.session.auth = (username, password)

    def url_for(self, path: str) -> str:
        path = path.lstrip("/")
        # authenticated REST calls live under /a/
        if self.authenticated:
            return f"{self.base_url}/a/{path}"
        return f"{self.base_url}/{path}"

    def get_sync(self, path: str) -> Any:
        url = self.url_for(path)
        logger.debug(f"GET {url}")
        r = self.session.get(url, timeout=self.timeout)
        r.raise_for_status()
        return parse_response_body(r.text)

    def get_current_user_sync(self) -> AccountInfo | None:
        """Return the account behind the configured credentials."""
        if not self.authenticated:
            return AccountInfo(account_id=ANONYMOUS_ACCOUNT_ID)
        try:
            body = self.get_sync("accounts/self")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code in (401, 403):
                logger.warning(f"Credentials rejected by {self.base_url}")
                return AccountInfo(account_id=ANONYMOUS_ACCOUNT_ID)
            raise
        if not isinstance(body, dict):
            return None
        try:
            account_id = int(body.get("_account_id", ANONYMOUS_ACCOUNT_ID))
        except (TypeError, ValueError) as e:
            raise HostServiceError(
                f"Invalid account id from {self.base_url}: {body.get('_account_id')!r}"
            ) from e
        return AccountInfo(account_id=account_id, username=str(body.get("username", "")))

    async def get(self, path: str) -> Any:
        """Asynchronously fetch and decode one REST resource."""
        return await asyncio.to_thread(self.get_sync, path)

    async def get_current_user(self) -> AccountInfo | None:
        return await asyncio.to_thread(self.get_current_user_sync)
