"""
Tradfri CLI: `tradfri` command.

Commands:
  tradfri auth login          Exchange the security code for a preshared key
  tradfri auth status         Show the saved gateway and user
  tradfri devices list        List devices
  tradfri devices show <id>   Show one device
  tradfri devices on|off <id> Switch a bulb
"""

import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install tradfri-coap[cli]")

from tradfri_coap.client import Gateway
from tradfri_coap.keystore import DEFAULT_KEY_FILE

console = Console()
CONFIG_FILE = Path.home() / ".tradfri" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_gateway() -> Gateway:
    cfg = _load_config()
    if not cfg.get("host") or not cfg.get("user"):
        console.print("[red]Not logged in. Run `tradfri auth login` first.[/red]")
        raise SystemExit(1)
    gateway = Gateway(cfg["host"], "", key_file=cfg.get("key_file", DEFAULT_KEY_FILE))
    if gateway.key_store.load() is None:
        console.print(f"[red]No preshared key in {gateway.key_store.path}. Run `tradfri auth login` again.[/red]")
        raise SystemExit(1)
    gateway.authenticate(cfg["user"])
    return gateway


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log transport requests")
def main(verbose: bool):
    """Tradfri CLI: control gateway bulbs over CoAP."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# Register subcommands from separate modules
from tradfri_coap.cli.auth import auth
from tradfri_coap.cli.devices import devices

main.add_command(auth)
main.add_command(devices)


if __name__ == "__main__":
    main()
