from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

T = TypeVar("T")


@click.group()
def main() -> None:
    """MorrisB Tracking - site plugin injecting the MorrisB tracking snippet."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from MORRISB_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from MORRISB_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the demo host with the admin page and page filter mounted."""
    import uvicorn

    from morrisb_tracking.plugin.settings import PluginSettings

    settings = PluginSettings()

    uvicorn.run(
        "morrisb_tracking.plugin.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


def _with_plugin(action: Callable[..., Awaitable[T]]) -> T:
    """Run *action(plugin)* against the configured options store, then close it."""
    from morrisb_tracking.plugin.log import setup_logging
    from morrisb_tracking.plugin.plugin import TrackingPlugin
    from morrisb_tracking.plugin.settings import get_settings
    from morrisb_tracking.plugin.store import OptionsStoreUnavailableError, create_options_store

    settings = get_settings()
    setup_logging(settings.log_level)
    try:
        store = create_options_store(settings)
    except OptionsStoreUnavailableError as exc:
        raise click.ClickException(str(exc)) from None

    async def _run() -> T:
        try:
            return await action(TrackingPlugin(store, settings))
        finally:
            await store.aclose()

    return asyncio.run(_run())


@main.group()
def options() -> None:
    """Read and write the stored workspace identifier."""


@options.command("get")
def options_get() -> None:
    """Print the stored workspace identifier and connection status."""

    async def _get(plugin) -> tuple[str, str]:
        return await plugin.workspace_id(), (await plugin.status()).value

    workspace_id, status = _with_plugin(_get)
    click.echo(f"workspace_id: {workspace_id}")
    click.echo(f"status: {status}")


@options.command("set")
@click.argument("workspace_id")
def options_set(workspace_id: str) -> None:
    """Store WORKSPACE_ID verbatim."""
    from morrisb_tracking.plugin.managers.options import InvalidWorkspaceIdError

    try:
        config = _with_plugin(lambda plugin: plugin.save_settings(workspace_id))
    except InvalidWorkspaceIdError as exc:
        raise click.ClickException(str(exc)) from None
    click.echo(f"Saved (status: {config.status.value}).")


@options.command("clear")
def options_clear() -> None:
    """Clear the workspace identifier; the snippet stops being emitted."""
    _with_plugin(lambda plugin: plugin.save_settings(""))
    click.echo("Cleared (status: not_connected).")


@main.command()
def snippet() -> None:
    """Print the snippet that would be injected into every page."""
    html = _with_plugin(lambda plugin: plugin.emit_tracking_snippet())
    if not html:
        raise click.ClickException("No workspace identifier stored; nothing would be emitted.")
    click.echo(html)


@main.command()
@click.argument("url")
def verify(url: str) -> None:
    """Check that URL serves the snippet for the stored workspace."""
    from morrisb_tracking.plugin.models.enums import VerificationOutcome
    from morrisb_tracking.plugin.verify import NotConfiguredError, verify_installation

    async def _verify(plugin):
        return await verify_installation(url, await plugin.workspace_id(), plugin.settings)

    try:
        result = _with_plugin(_verify)
    except NotConfiguredError as exc:
        raise click.ClickException(str(exc)) from None
    click.echo(f"{result.outcome.value} (attempts={result.attempts}, status={result.status_code})")
    if result.outcome is not VerificationOutcome.INSTALLED:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


def _alembic_config():
    """Build an Alembic Config from the package's alembic.ini.

    Both alembic.ini and the alembic/ directory live inside the package,
    so this works whether running from source or from an installed package.
    """
    from pathlib import Path

    from alembic.config import Config

    ini_path = Path(__file__).parent / "plugin" / "alembic.ini"
    return Config(str(ini_path))


@main.group()
def db() -> None:
    """Options table migrations (options_store=database)."""


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head).")
def upgrade(revision: str) -> None:
    """Run database migrations forward."""
    from alembic import command

    command.upgrade(_alembic_config(), revision)
    click.echo(f"Database upgraded to {revision}.")


@db.command()
@click.option("--revision", default="-1", help="Target revision (default: -1, one step back).")
def downgrade(revision: str) -> None:
    """Roll back database migrations."""
    from alembic import command

    command.downgrade(_alembic_config(), revision)
    click.echo(f"Database downgraded to {revision}.")


@db.command()
def current() -> None:
    """Show current database revision."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)


@db.command()
def history() -> None:
    """Show migration history."""
    from alembic import command

    command.history(_alembic_config(), verbose=True)


if __name__ == "__main__":
    main()
