"""
Gateway / AsyncGateway: session against one gateway.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional, Union

from tradfri_coap.auth import Auth, Credentials
from tradfri_coap.devices import DevicesAPI
from tradfri_coap.keystore import DEFAULT_KEY_FILE, KeyStore
from tradfri_coap.models.device import Device
from tradfri_coap.transport.coap import DEFAULT_COAP_BINARY, DEFAULT_TIMEOUT, CoapClient

logger = logging.getLogger(__name__)


class AsyncGateway:
    """Async gateway session (primary).

    Starts unauthenticated. authenticate() either adopts the key found in
    ``key_file`` or bootstraps a new one with the security code.
    """

    def __init__(
        self,
        host: str,
        security_code: str,
        key_file: Union[str, Path] = DEFAULT_KEY_FILE,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        coap_binary: str = DEFAULT_COAP_BINARY,
        coap_client: Optional[CoapClient] = None,
    ):
        self._host = host
        self._credentials = Credentials(security_code)
        self._lock = asyncio.Lock()

        self.coap = coap_client or CoapClient(binary=coap_binary, timeout=timeout)
        self.key_store = KeyStore(key_file)
        self.auth = Auth(self.coap, host, self._credentials, self.key_store)
        self.devices = DevicesAPI(self.coap, host, self._credentials)

    @property
    def host(self) -> str:
        return self._host

    @property
    def user(self) -> Optional[str]:
        return self._credentials.user

    @property
    def authenticated(self) -> bool:
        return self._credentials.complete

    async def authenticate(self, user: str, force: bool = False) -> None:
        async with self._lock:
            await self.auth.authenticate(user, force=force)
        logger.debug("Authenticated against %s as %s", self._host, user)

    async def get_device_ids(self) -> list[int]:
        return await self.devices.list_ids()

    async def get_device(self, device_id: int) -> Device:
        device = await self.devices.get(device_id)
        return device.bind(self)

    async def get_devices(self) -> list[Device]:
        """Fetch every device, one request at a time."""
        return [await self.get_device(device_id) for device_id in await self.get_device_ids()]

    async def set_device_state(self, device_id: int, payload: Any) -> None:
        await self.devices.set_state(device_id, payload)

    def __repr__(self) -> str:
        return f"AsyncGateway(host={self._host!r}, {self._credentials!r})"


class Gateway:
    """Sync wrapper around AsyncGateway. Runs the event loop internally."""

    def __init__(self, host: str, security_code: str, **kwargs: Any):
        self._async = AsyncGateway(host, security_code, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def host(self) -> str:
        return self._async.host

    @property
    def user(self) -> Optional[str]:
        return self._async.user

    @property
    def authenticated(self) -> bool:
        return self._async.authenticated

    @property
    def key_store(self) -> KeyStore:
        return self._async.key_store

    def authenticate(self, user: str, force: bool = False) -> None:
        self._run(self._async.authenticate(user, force=force))

    def get_device_ids(self) -> list[int]:
        return self._run(self._async.get_device_ids())

    def get_device(self, device_id: int) -> Device:
        return self._run(self._async.devices.get(device_id)).bind(self)

    def get_devices(self) -> list[Device]:
        return [self.get_device(device_id) for device_id in self.get_device_ids()]

    def set_device_state(self, device_id: int, payload: Any) -> None:
        self._run(self._async.set_device_state(device_id, payload))

    def close(self) -> None:
        if not self._loop.is_closed():
            self._loop.close()

    def __del__(self) -> None:
        loop = getattr(self, "_loop", None)
        if loop is not None and not loop.is_closed():
            loop.close()

    def __enter__(self) -> "Gateway":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
