"""CLI: tradfri auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from tradfri_coap.client import Gateway
from tradfri_coap.errors import TradfriError
from tradfri_coap.keystore import DEFAULT_KEY_FILE, KeyStore

console = Console()


def _load_config() -> dict:
    from tradfri_coap.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from tradfri_coap.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--host", envvar="TRADFRI_HOST", default=None, help="Gateway address")
@click.option("--security-code", envvar="TRADFRI_SECURITY_CODE", default=None,
              help="Security code printed on the gateway")
@click.option("--user", default=None, help="Identity to register the key under")
@click.option("--key-file", default=None, help="Where the preshared key is stored")
@click.option("--force", is_flag=True, help="Request a new key even if one is stored")
def auth_login(host: Optional[str], security_code: Optional[str], user: Optional[str],
               key_file: Optional[str], force: bool):
    """Obtain (or reuse) a preshared key for the gateway."""
    cfg = _load_config()
    host = host or cfg.get("host") or click.prompt("Gateway address")
    user = user or cfg.get("user") or click.prompt("User")
    key_file = key_file or cfg.get("key_file", DEFAULT_KEY_FILE)

    if security_code is None and (force or KeyStore(key_file).load() is None):
        security_code = click.prompt("Security code", hide_input=True)

    gateway = Gateway(host, security_code or "", key_file=key_file)
    try:
        with console.status("Authenticating..."):
            gateway.authenticate(user, force=force)
    except TradfriError as e:
        console.print(f"[red]Authentication failed: {e}[/red]")
        raise SystemExit(1)
    finally:
        gateway.close()

    _save_config({**cfg, "host": host, "user": user, "key_file": key_file})
    console.print(f"[green]Authenticated as {user} on {host}[/green]")
    console.print(f"[dim]Preshared key stored in {key_file}[/dim]")


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    key_file = cfg.get("key_file", DEFAULT_KEY_FILE)
    if cfg.get("host") and KeyStore(key_file).load():
        console.print(f"[green]Logged in[/green] as {cfg.get('user', 'unknown')} on {cfg['host']}")
    else:
        console.print("[yellow]Not logged in. Run `tradfri auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Forget the gateway and its preshared key."""
    cfg = _load_config()
    KeyStore(cfg.get("key_file", DEFAULT_KEY_FILE)).clear()
    _save_config({})
    console.print("[green]Logged out.[/green]")
