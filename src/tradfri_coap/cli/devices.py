"""CLI: tradfri devices list|show|on|off"""

import json

import click
from rich.console import Console
from rich.table import Table

from tradfri_coap.errors import TradfriError
from tradfri_coap.models.device import Device

console = Console()


def _get_gateway():
    from tradfri_coap.cli.main import _get_gateway
    return _get_gateway()


def _device_json(device: Device) -> dict:
    return device.model_dump(mode="json")


@click.group()
def devices():
    """Device commands."""


@devices.command("list")
@click.option("--json-output", "--json", is_flag=True)
def devices_list(json_output):
    """List devices with their light state."""
    try:
        with _get_gateway() as gateway:
            found = gateway.get_devices()
    except TradfriError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps([_device_json(d) for d in found], indent=2))
        return
    table = Table(title=f"Devices ({len(found)} total)")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Power")
    table.add_column("Temperature")
    for d in found:
        table.add_row(str(d.id), d.name, "on" if d.is_on else "off", d.data.temperature.name.lower())
    console.print(table)


@devices.command("show")
@click.argument("device_id", type=int)
@click.option("--json-output", "--json", is_flag=True)
def devices_show(device_id, json_output):
    """Show a single device."""
    try:
        with _get_gateway() as gateway:
            device = gateway.get_device(device_id)
    except TradfriError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps(_device_json(device), indent=2))
        return
    console.print(f"[bold]{device.name}[/bold] (ID: {device.id})")
    console.print(f"  power: {'on' if device.is_on else 'off'}")
    console.print(f"  temperature: {device.data.temperature.name.lower()}")


def _switch(device_id: int, on: bool) -> None:
    try:
        with _get_gateway() as gateway:
            device = gateway.get_device(device_id)
            with console.status(f"Turning {'on' if on else 'off'} {device.name}..."):
                if on:
                    device.turn_on()
                else:
                    device.turn_off()
    except TradfriError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    console.print(f"[green]{device.name} is {'on' if on else 'off'}.[/green]")


@devices.command("on")
@click.argument("device_id", type=int)
def devices_on(device_id):
    """Turn a bulb on."""
    _switch(device_id, True)


@devices.command("off")
@click.argument("device_id", type=int)
def devices_off(device_id):
    """Turn a bulb off."""
    _switch(device_id, False)
