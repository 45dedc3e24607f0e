"""
devfleet SDK CLI.

Usage:
    devfleet devices --application MyFleet
    devfleet device info 7cf02a6
    devfleet device reboot 7cf02a6 --force
    devfleet env set 7cf02a6 EDITOR vim
    devfleet device-types
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Awaitable, Callable

import click
from rich.console import Console
from rich.table import Table

from devfleet.client import AsyncDevFleetClient
from devfleet.exceptions import DevFleetError
from devfleet.logging import setup_logging

console = Console()
err_console = Console(stderr=True)


def get_api_key(ctx: click.Context) -> str:
    """Get API key from context or environment."""
    api_key = ctx.obj.get("api_key") if ctx.obj else None
    if not api_key:
        api_key = os.getenv("DEVFLEET_API_KEY", "")
    if not api_key:
        err_console.print("[red]Error:[/red] Set DEVFLEET_API_KEY environment variable")
        raise SystemExit(1)
    return api_key


def run(ctx: click.Context, action: Callable[[AsyncDevFleetClient], Awaitable[Any]]) -> Any:
    """Run action against a client, turning SDK errors into exit code 1."""
    api_key = get_api_key(ctx)

    async def _run() -> Any:
        async with AsyncDevFleetClient(api_key=api_key) as client:
            return await action(client)

    try:
        return asyncio.run(_run())
    except DevFleetError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


@click.group()
@click.option("--api-key", envvar="DEVFLEET_API_KEY", help="devfleet API key")
@click.option("--debug", is_flag=True, help="Log HTTP requests")
@click.version_option(package_name="devfleet")
@click.pass_context
def main(ctx: click.Context, api_key: str | None, debug: bool) -> None:
    """devfleet SDK command-line interface."""
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    setup_logging(level="DEBUG" if debug else None)


# =============================================================================
# Devices Command
# =============================================================================


@main.command()
@click.option("--application", "-a", help="Only devices of this application")
@click.pass_context
def devices(ctx: click.Context, application: str | None) -> None:
    """List devices."""

    async def action(client: AsyncDevFleetClient) -> None:
        if application:
            items = await client.device.get_all_by_application(application)
        else:
            items = await client.device.get_all()

        if not items:
            console.print("[yellow]No devices[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("UUID", width=9)
        table.add_column("Name", width=24)
        table.add_column("Device type", width=18)
        table.add_column("Status", width=18)
        table.add_column("OS", width=16)
        table.add_column("Last seen", width=22)

        for device in items:
            status = client.device.get_status(device)
            color = "green" if status == "idle" else "yellow"
            table.add_row(
                (device.get("uuid") or "")[:7],
                device.get("device_name") or "",
                str(device.get("device_type") or ""),
                f"[{color}]{status.value}[/{color}]",
                client.device.get_os_version(device) or "n/a",
                client.device.last_online(device),
            )

        console.print(table)

    run(ctx, action)


# =============================================================================
# Device Command
# =============================================================================


@main.group()
def device() -> None:
    """Single device commands."""
    pass


@device.command("info")
@click.argument("uuid")
@click.pass_context
def device_info(ctx: click.Context, uuid: str) -> None:
    """Show device details."""

    async def action(client: AsyncDevFleetClient) -> None:
        item = await client.device.get(uuid)
        rows = [
            ("UUID", item.get("uuid")),
            ("Name", item.get("device_name")),
            ("Device type", item.get("device_type")),
            ("Status", client.device.get_status(item).value),
            ("Last seen", client.device.last_online(item)),
            ("OS", client.device.get_os_version(item)),
            ("Supervisor", item.get("supervisor_version")),
            ("IP address", item.get("ip_address")),
            ("Note", item.get("note")),
            ("Dashboard", client.device.get_dashboard_url(item["uuid"])),
        ]
        for label, value in rows:
            console.print(f"[dim]{label}:[/dim] {value if value is not None else 'n/a'}")

    run(ctx, action)


@device.command("rename")
@click.argument("uuid")
@click.argument("name")
@click.pass_context
def device_rename(ctx: click.Context, uuid: str, name: str) -> None:
    """Rename a device."""
    run(ctx, lambda client: client.device.rename(uuid, name))
    console.print(f"Renamed [cyan]{uuid}[/cyan] to {name}")


@device.command("note")
@click.argument("uuid")
@click.argument("note")
@click.pass_context
def device_note(ctx: click.Context, uuid: str, note: str) -> None:
    """Set the note of a device."""
    run(ctx, lambda client: client.device.note(uuid, note))


@device.command("reboot")
@click.argument("uuid")
@click.option("--force", "-f", is_flag=True, help="Override update locks")
@click.pass_context
def device_reboot(ctx: click.Context, uuid: str, force: bool) -> None:
    """Reboot a device."""
    run(ctx, lambda client: client.device.reboot(uuid, force=force))
    console.print(f"Rebooting [cyan]{uuid}[/cyan]")


@device.command("shutdown")
@click.argument("uuid")
@click.option("--force", "-f", is_flag=True, help="Override update locks")
@click.pass_context
def device_shutdown(ctx: click.Context, uuid: str, force: bool) -> None:
    """Shut a device down."""
    run(ctx, lambda client: client.device.shutdown(uuid, force=force))
    console.print(f"Shutting down [cyan]{uuid}[/cyan]")


@device.command("identify")
@click.argument("uuid")
@click.pass_context
def device_identify(ctx: click.Context, uuid: str) -> None:
    """Blink the identification LED of a device."""
    run(ctx, lambda client: client.device.identify(uuid))


@device.command("move")
@click.argument("uuid")
@click.argument("application")
@click.pass_context
def device_move(ctx: click.Context, uuid: str, application: str) -> None:
    """Move a device to another application."""
    run(ctx, lambda client: client.device.move(uuid, application))
    console.print(f"Moved [cyan]{uuid}[/cyan] to {application}")


@device.command("pin")
@click.argument("uuid")
@click.argument("release")
@click.pass_context
def device_pin(ctx: click.Context, uuid: str, release: str) -> None:
    """Pin a device to a release (full commit hash or release id)."""
    release_ref: str | int = int(release) if release.isdigit() else release
    run(ctx, lambda client: client.device.pin_to_release(uuid, release_ref))


@device.command("track")
@click.argument("uuid")
@click.pass_context
def device_track(ctx: click.Context, uuid: str) -> None:
    """Make a device follow its application's release."""
    run(ctx, lambda client: client.device.track_application_release(uuid))


@device.command("purge")
@click.argument("uuid")
@click.pass_context
def device_purge(ctx: click.Context, uuid: str) -> None:
    """Clear application data of a device."""
    run(ctx, lambda client: client.device.purge(uuid))


@device.command("restart")
@click.argument("uuid")
@click.pass_context
def device_restart(ctx: click.Context, uuid: str) -> None:
    """Restart the application containers of a device."""
    run(ctx, lambda client: client.device.restart_application(uuid))


@device.command("os-update")
@click.argument("uuid")
@click.argument("version", required=False)
@click.pass_context
def device_os_update(ctx: click.Context, uuid: str, version: str | None) -> None:
    """Start a host OS update, or list the versions available.

    Examples:

        devfleet device os-update 7cf02a6

        devfleet device os-update 7cf02a6 2.31.0+rev1
    """

    async def action(client: AsyncDevFleetClient) -> None:
        if version:
            await client.device.start_os_update(uuid, version)
            console.print(f"Updating [cyan]{uuid}[/cyan] to {version}")
            return

        item = await client.device.get(uuid, {"$select": ["device_type", "os_version", "os_variant"]})
        current = client.device.get_os_version(item)
        if not current:
            err_console.print("[yellow]OS version of the device is unknown[/yellow]")
            return
        available = await client.os.get_supported_os_update_versions(item["device_type"], current)
        console.print(f"[dim]Current:[/dim] {available.current}")
        for candidate in available.versions:
            marker = " [green](recommended)[/green]" if candidate == available.recommended else ""
            console.print(f"  {candidate}{marker}")

    run(ctx, action)


# =============================================================================
# Env / Tags Commands
# =============================================================================


def _print_variables(items: list[dict[str, Any]], key_field: str) -> None:
    if not items:
        console.print("[yellow]None set[/yellow]")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", width=8)
    table.add_column("Name", width=30)
    table.add_column("Value")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            str(item.get(key_field) or ""),
            str(item.get("value") or ""),
        )
    console.print(table)


@main.group()
def env() -> None:
    """Device environment variables."""
    pass


@env.command("list")
@click.argument("uuid")
@click.pass_context
def env_list(ctx: click.Context, uuid: str) -> None:
    """List environment variables of a device."""
    items = run(ctx, lambda client: client.device.env_var.get_all_by_device(uuid))
    _print_variables(items, "name")


@env.command("set")
@click.argument("uuid")
@click.argument("name")
@click.argument("value")
@click.pass_context
def env_set(ctx: click.Context, uuid: str, name: str, value: str) -> None:
    """Set an environment variable."""
    run(ctx, lambda client: client.device.env_var.set(uuid, name, value))


@env.command("rm")
@click.argument("uuid")
@click.argument("name")
@click.pass_context
def env_rm(ctx: click.Context, uuid: str, name: str) -> None:
    """Remove an environment variable."""
    run(ctx, lambda client: client.device.env_var.remove(uuid, name))


@main.group()
def tags() -> None:
    """Device tags."""
    pass


@tags.command("list")
@click.argument("uuid")
@click.pass_context
def tags_list(ctx: click.Context, uuid: str) -> None:
    """List tags of a device."""
    items = run(ctx, lambda client: client.device.tags.get_all_by_device(uuid))
    _print_variables(items, "tag_key")


@tags.command("set")
@click.argument("uuid")
@click.argument("key")
@click.argument("value")
@click.pass_context
def tags_set(ctx: click.Context, uuid: str, key: str, value: str) -> None:
    """Set a tag."""
    run(ctx, lambda client: client.device.tags.set(uuid, key, value))


@tags.command("rm")
@click.argument("uuid")
@click.argument("key")
@click.pass_context
def tags_rm(ctx: click.Context, uuid: str, key: str) -> None:
    """Remove a tag."""
    run(ctx, lambda client: client.device.tags.remove(uuid, key))


# =============================================================================
# Device Types Command
# =============================================================================


@main.command("device-types")
@click.pass_context
def device_types(ctx: click.Context) -> None:
    """List supported device types."""
    items = run(ctx, lambda client: client.config.get_device_types())

    table = Table(show_header=True, header_style="bold")
    table.add_column("Slug", width=28)
    table.add_column("Name", width=36)
    table.add_column("Arch", width=10)
    for item in items:
        table.add_row(item.slug, item.name, item.arch)
    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    main()
