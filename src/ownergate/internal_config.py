from __future__ import annotations

import platform
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


_ownergate_version = _get_package_version("ownergate")

DEFAULT_USER_AGENT = (
    f"ownergate/{_ownergate_version}"
    f" ({platform.system()}; {platform.machine()}; compatible)"
)

DEFAULT_PLUGIN_NAME = "ownergate"
EXTENSION_POINT_ID = "change_plugins"

# Gerrit marks "no user" with account id 0
ANONYMOUS_ACCOUNT_ID = 0

# Gerrit prepends this to every JSON response body
XSSI_PREFIX = ")]}'"

HTTP_REQUEST_TIMEOUT_SECONDS = 30

HTTP_RETRY_TOTAL = 3
HTTP_RETRY_BACKOFF_FACTOR = 1
HTTP_RETRY_STATUS_FORCELIST = [429, 500, 502, 503, 504]
HTTP_RETRY_ALLOWED_METHODS = ["HEAD", "GET", "OPTIONS"]
