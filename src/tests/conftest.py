from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from ownergate.models import AccountInfo, LabelNode


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="run slow tests that start a local HTTP server",
    )
    parser.addoption(
        "--only-slow",
        action="store_true",
        default=False,
        help="run only tests marked as slow",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    only_slow = bool(config.getoption("--only-slow"))
    run_slow = bool(config.getoption("--slow")) or only_slow

    if only_slow:
        deselected = [item for item in items if "slow" not in item.keywords]
        if deselected:
            config.hook.pytest_deselected(items=deselected)
        items[:] = [item for item in items if "slow" in item.keywords]

    if run_slow:
        return

    skip_slow = pytest.mark.skip(reason="need --slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class FakeContainer:
    def __init__(self) -> None:
        self.nodes: list[LabelNode] = []

    def append(self, node: LabelNode) -> None:
        self.nodes.append(node)

    def remove(self, node: LabelNode) -> None:
        self.nodes.remove(node)


class FakeHost:
    """In-memory stand-in for the review tool's extension services.

    ``responses`` maps lookup paths to bodies (or exceptions to raise);
    ``gates`` maps lookup paths to events the response waits for.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        account_id: int | None = 1000,
    ) -> None:
        self.user = AccountInfo(account_id) if account_id is not None else None
        self.responses = dict(responses or {})
        self.gates: dict[str, asyncio.Event] = {}
        self.requests: list[str] = []
        self.container = FakeContainer()
        self.alerts: list[str] = []
        self.hidden_submit = 0

    def current_user(self) -> AccountInfo | None:
        return self.user

    async def http_get(self, path: str) -> Any:
        self.requests.append(path)
        if path in self.gates:
            await self.gates[path].wait()
        response = self.responses.get(path)
        if isinstance(response, Exception):
            raise response
        return response

    def extension_point(self, container_id: str) -> FakeContainer | None:
        return self.container if container_id == "change_plugins" else None

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def html(self, template: str, **values: object) -> str:
        return template.format(**values)

    def css(self, style: str) -> str:
        return f"css[{style}]"

    def hide_submit_control(self) -> bool:
        self.hidden_submit += 1
        return True


@pytest.fixture
def fake_host() -> Callable[..., FakeHost]:
    return FakeHost
