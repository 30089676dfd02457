"""Host services consumed by the extension.

The review tool provides these capabilities; everything in ownergate takes
them as constructor arguments. ``ConsoleHost`` is the terminal-backed host
used by the CLI.
"""

from __future__ import annotations

import hashlib
import html
import logging
import re
from typing import Any, Awaitable, Callable, Protocol

import typer

from ownergate.api_client import GerritRestClient
from ownergate.internal_config import EXTENSION_POINT_ID
from ownergate.models import AccountInfo, LabelNode

logger: logging.Logger = logging.getLogger(__name__)

CurrentUser = Callable[[], "AccountInfo | None"]
HttpGet = Callable[[str], Awaitable[Any]]
Alert = Callable[[str], None]


class ExtensionPoint(Protocol):
    def append(self, node: LabelNode) -> None: ...

    def remove(self, node: LabelNode) -> None: ...


class Host(Protocol):
    def current_user(self) -> AccountInfo | None: ...

    async def http_get(self, path: str) -> Any: ...

    def extension_point(self, container_id: str) -> ExtensionPoint | None: ...

    def alert(self, message: str) -> None: ...

    def html(self, template: str, **values: object) -> str: ...

    def css(self, style: str) -> str: ...

    def hide_submit_control(self) -> bool: ...


def render_html(template: str, **values: object) -> str:
    """Fill ``{name}`` placeholders with HTML-escaped values."""
    return template.format(**{k: html.escape(str(v)) for k, v in values.items()})


def css_class(style: str) -> str:
    """Return a stable generated class name for a style declaration."""
    digest = hashlib.sha1(style.encode("utf-8")).hexdigest()[:8]
    return f"ownergate-css-{digest}"


_COLOR_RE = re.compile(r"color:\s*([^;]+);?")
_TERMINAL_COLORS = {
    "#060": typer.colors.GREEN,
    "#d14836": typer.colors.RED,
    "green": typer.colors.GREEN,
    "red": typer.colors.RED,
}


def terminal_color(style: str) -> str | None:
    match = _COLOR_RE.search(style)
    if not match:
        return None
    return _TERMINAL_COLORS.get(match.group(1).strip().lower())


class ConsoleExtensionPoint(object):
    """Extension point that prints labels to the terminal."""

    def __init__(self, styles: dict[str, str]) -> None:
        self.styles = styles
        self.nodes: list[LabelNode] = []

    def append(self, node: LabelNode) -> None:
        self.nodes.append(node)
        color = terminal_color(self.styles.get(node.css_class, ""))
        typer.echo(typer.style(node.text, fg=color, bold=True))

    def remove(self, node: LabelNode) -> None:
        if node in self.nodes:
            self.nodes.remove(node)


class ConsoleHost(object):
    """Host services backed by a Gerrit REST client and the terminal."""

    def __init__(
        self, client: GerritRestClient, user: AccountInfo | None = None
    ) -> None:
        self.client = client
        self.user = user
        self.styles: dict[str, str] = {}
        self.container = ConsoleExtensionPoint(self.styles)
        self.alerts: list[str] = []

    def current_user(self) -> AccountInfo | None:
        return self.user

    async def http_get(self, path: str) -> Any:
        return await self.client.get(path)

    def extension_point(self, container_id: str) -> ConsoleExtensionPoint | None:
        if container_id != EXTENSION_POINT_ID:
            return None
        return self.container

    def alert(self, message: str) -> None:
        self.alerts.append(message)
        typer.echo(typer.style(message, fg=typer.colors.RED), err=True)

    def html(self, template: str, **values: object) -> str:
        return render_html(template, **values)

    def css(self, style: str) -> str:
        name = css_class(style)
        self.styles[name] = style
        return name

    def hide_submit_control(self) -> bool:
        # nothing to hide on a terminal
        return False
