#! /bin/env python3
from __future__ import annotations

import asyncio
import logging

import requests
import typer

from ownergate.api_client import GerritRestClient
from ownergate.controller import ExtensionController
from ownergate.exceptions import OwnerGateError
from ownergate.gate import FAIL_OPEN_ON_UNKNOWN, SubmitGate
from ownergate.host import ConsoleHost, Host
from ownergate.internal_config import (
    _ownergate_version,
    DEFAULT_PLUGIN_NAME,
    DEFAULT_USER_AGENT,
)
from ownergate.models import OwnershipStatus
from ownergate.renderer import AnnotationRenderer
from ownergate.resolver import StatusResolver
from ownergate.variants import GateVariant, get_variant, load_variant

app: typer.Typer = typer.Typer(no_args_is_help=True)
logger: logging.Logger = logging.getLogger(__name__)

EXIT_SUBMIT_DENIED = 2


def install(
    host: Host,
    variant: GateVariant,
    plugin_name: str = DEFAULT_PLUGIN_NAME,
    fail_open: bool = FAIL_OPEN_ON_UNKNOWN,
) -> ExtensionController:
    """Build one gate instance on top of the host's services."""
    resolver = StatusResolver(
        http_get=host.http_get,
        current_user=host.current_user,
        plugin_name=plugin_name,
    )
    renderer = AnnotationRenderer(
        extension_point=host.extension_point,
        html=host.html,
        css=host.css,
        hide_submit_control=host.hide_submit_control,
    )
    gate = SubmitGate(
        alert=host.alert, fail_open=fail_open, unknown_message=variant.unknown_text
    )
    return ExtensionController(variant, resolver, renderer, gate)


def _configure_logging(log_level: str) -> None:
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    logging.basicConfig(
        level=level,
        format="%(relativeCreated)d [%(levelname)s] %(message)s",
    )


def _resolve_variant(variant: str, variant_config: str) -> GateVariant:
    if variant_config:
        return load_variant(variant_config)
    return get_variant(variant)


async def _run_gate(
    url: str,
    user: str,
    password: str,
    selected: GateVariant,
    plugin_name: str,
    change: int,
    revision: int,
) -> tuple[ExtensionController, ConsoleHost]:
    client = GerritRestClient(url, username=user, password=password)
    account = await client.get_current_user()
    host = ConsoleHost(client, account)
    controller = install(host, selected, plugin_name=plugin_name)
    await controller.refresh(change, revision)
    return controller, host


def _gate_for(
    change: int,
    revision: int,
    url: str,
    user: str,
    password: str,
    variant: str,
    variant_config: str,
    plugin_name: str,
    log_level: str,
) -> tuple[ExtensionController, ConsoleHost]:
    _configure_logging(log_level)
    try:
        selected = _resolve_variant(variant, variant_config)
        return asyncio.run(
            _run_gate(url, user, password, selected, plugin_name, change, revision)
        )
    except OwnerGateError as e:
        logger.error(f"{e}")
        raise typer.Exit(code=1)
    except requests.RequestException as e:
        logger.error(f"Cannot reach {url}: {e}")
        raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ownergate {_ownergate_version}")
        typer.echo(f"User-Agent: {DEFAULT_USER_AGENT}")
        raise typer.Exit()


@app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and User-Agent, then exit.",
    ),
) -> None:
    """Check module/file ownership of Gerrit revisions."""


@app.command()
def status(
    change: int = typer.Argument(..., help="Change number."),
    revision: int = typer.Argument(..., help="Patch set number."),
    url: str = typer.Option(..., envvar="GERRIT_URL", help="Gerrit base URL."),
    user: str = typer.Option("", envvar="GERRIT_USER"),
    password: str = typer.Option("", envvar="GERRIT_HTTP_PASSWORD", help="HTTP password."),
    variant: str = typer.Option("moduleowner", help="moduleowner or file-owner."),
    variant_config: str = typer.Option("", help="JSON5 file overriding a variant."),
    plugin_name: str = typer.Option(DEFAULT_PLUGIN_NAME),
    log_level: str = "info",
) -> None:
    """Show the ownership label for a revision."""
    controller, _host = _gate_for(
        change, revision, url, user, password, variant, variant_config,
        plugin_name, log_level,
    )
    typer.echo(controller.state.current_status.value)


@app.command("check-submit")
def check_submit(
    change: int = typer.Argument(..., help="Change number."),
    revision: int = typer.Argument(..., help="Patch set number."),
    url: str = typer.Option(..., envvar="GERRIT_URL", help="Gerrit base URL."),
    user: str = typer.Option("", envvar="GERRIT_USER"),
    password: str = typer.Option("", envvar="GERRIT_HTTP_PASSWORD", help="HTTP password."),
    variant: str = typer.Option("moduleowner", help="moduleowner or file-owner."),
    variant_config: str = typer.Option("", help="JSON5 file overriding a variant."),
    plugin_name: str = typer.Option(DEFAULT_PLUGIN_NAME),
    log_level: str = "info",
) -> None:
    """Exit non-zero if the submit gate would block this revision."""
    controller, _host = _gate_for(
        change, revision, url, user, password, variant, variant_config,
        plugin_name, log_level,
    )
    if not controller.on_submit_attempted(change, revision):
        raise typer.Exit(code=EXIT_SUBMIT_DENIED)
    if controller.state.current_status is OwnershipStatus.UNKNOWN:
        logger.info("Ownership unknown, submit allowed")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
