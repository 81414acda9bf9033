"""
Auth module: pre-shared key bootstrap.

The gateway's printed security code is only good for one thing: asking the
gateway for a per-user pre-shared key. Every other request authenticates
with that key, so it is persisted and reused on the next run.
"""

import json
import logging
from typing import Optional

from tradfri_coap import endpoints
from tradfri_coap.errors import AuthError, DecodeError
from tradfri_coap.keystore import KeyStore
from tradfri_coap.transport.coap import CoapClient, Method, RequestOptions

logger = logging.getLogger(__name__)

BOOTSTRAP_IDENTITY = "Client_identity"


class Credentials:
    __slots__ = ("security_code", "preshared_key", "user")

    def __init__(self, security_code: str, preshared_key: Optional[str] = None, user: Optional[str] = None):
        self.security_code = security_code
        self.preshared_key = preshared_key
        self.user = user

    @property
    def complete(self) -> bool:
        return self.preshared_key is not None and self.user is not None

    def options(self) -> RequestOptions:
        """Options carrying the session identity; raises if not authenticated."""
        if not self.complete:
            raise AuthError("Not authenticated. Call authenticate() first.")
        return RequestOptions.build().user(self.user).key(self.preshared_key)

    def __repr__(self) -> str:
        return f"Credentials(user={self.user!r}, authenticated={self.complete})"


class Auth:
    def __init__(self, coap: CoapClient, host: str, credentials: Credentials, store: KeyStore):
        self._coap = coap
        self._host = host
        self._credentials = credentials
        self._store = store
        self._stored_key = store.load()

    async def authenticate(self, user: str, force: bool = False) -> None:
        """Adopt the stored key, or request a new one from the gateway."""
        if self._stored_key and not force:
            logger.info("Preshared key loaded from %s", self._store.path)
            self._credentials.preshared_key = self._stored_key
            self._credentials.user = user
            return

        key = await self.request_key(user)
        self._store.save(key)
        self._stored_key = key
        self._credentials.preshared_key = key
        self._credentials.user = user

    async def request_key(self, user: str) -> str:
        """Exchange the security code for a pre-shared key bound to ``user``."""
        options = RequestOptions.new(
            Method.POST,
            BOOTSTRAP_IDENTITY,
            self._credentials.security_code,
            json.dumps({"9090": user}, separators=(",", ":")),
        )
        response = await self._coap.request(endpoints.uri(self._host, endpoints.AUTHENTICATE), options)
        response.raise_for_error()

        data = response.data()
        key = data.get("9091") if isinstance(data, dict) else None
        if not isinstance(key, str):
            raise DecodeError("Authentication response has no preshared key (9091).", {"response": data})
        logger.info("New preshared key issued for %s", user)
        return key
