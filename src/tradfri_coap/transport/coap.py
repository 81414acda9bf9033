"""
CoAP transport: drives the external ``coap-client`` (libcoap) binary.

The binary reports a payload on stdout and everything else (block info,
response codes) on stderr, so the outcome of a request is reconstructed
from both streams.
"""

from __future__ import annotations

import asyncio
import contextlib
import copy
import json
import logging
from enum import Enum
from typing import Any, Iterator, Optional

from tradfri_coap.errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_COAP_BINARY = "coap-client"
DEFAULT_TIMEOUT = 10.0

# Only 4.00 has a dedicated message so far; every other code falls back.
STATUS_MESSAGES = {
    "400": "Bad request.",
}
DEFAULT_STATUS_MESSAGE = "Bad request."

_FIELDS = (("method", "m"), ("user", "u"), ("key", "k"), ("payload", "e"))


class Method(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"


class RequestOptions:
    """Command-line options for one ``coap-client`` invocation.

    Setters return a copy, so a partially built request can be reused as a
    template. Iterating the options consumes them: every field is yielded
    once and cleared.
    """

    __slots__ = ("_method", "_user", "_key", "_payload")

    def __init__(self, method: Optional[str] = None, user: Optional[str] = None,
                 key: Optional[str] = None, payload: Optional[str] = None):
        self._method = method
        self._user = user
        self._key = key
        self._payload = payload

    @classmethod
    def build(cls) -> RequestOptions:
        return cls()

    @classmethod
    def new(cls, method: Method, user: str, key: str, payload: str) -> RequestOptions:
        return cls(Method(method).value, str(user), str(key), str(payload))

    def _with(self, field: str, value: Any) -> RequestOptions:
        clone = copy.copy(self)
        setattr(clone, f"_{field}", value)
        return clone

    def method(self, method: Method) -> RequestOptions:
        return self._with("method", Method(method).value)

    def user(self, user: Any) -> RequestOptions:
        return self._with("user", str(user))

    def key(self, key: Any) -> RequestOptions:
        return self._with("key", str(key))

    def payload(self, payload: Any) -> RequestOptions:
        return self._with("payload", str(payload))

    def pairs(self) -> list[tuple[str, str]]:
        """Set fields as ``(flag, value)`` in method, user, key, payload order."""
        pairs = []
        for field, flag in _FIELDS:
            value = getattr(self, f"_{field}")
            if value is not None:
                pairs.append((flag, value))
        return pairs

    def to_args(self) -> list[str]:
        args: list[str] = []
        for flag, value in self.pairs():
            args += [f"-{flag}", value]
        return args

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for field, flag in _FIELDS:
            value = getattr(self, f"_{field}")
            if value is not None:
                setattr(self, f"_{field}", None)
                yield flag, value

    def __repr__(self) -> str:
        shown = ", ".join(
            f"{flag}={'***' if flag == 'k' else value!r}" for flag, value in self.pairs()
        )
        return f"RequestOptions({shown})"


class CoapResponse:
    """Classified outcome of a request: a JSON payload or an error message."""

    __slots__ = ("_ok", "_data", "message", "status")

    def __init__(self, ok: bool, data: Any = None, message: Optional[str] = None,
                 status: Optional[str] = None):
        self._ok = ok
        self._data = data
        self.message = message
        self.status = status

    @classmethod
    def success(cls, data: Any) -> CoapResponse:
        return cls(True, data=data)

    @classmethod
    def error(cls, message: str, status: Optional[str] = None) -> CoapResponse:
        return cls(False, message=message, status=status)

    def is_ok(self) -> bool:
        return self._ok

    def data(self) -> Any:
        """Payload of a success, ``{}`` for an error."""
        if not self._ok:
            return {}
        return self._data

    def raise_for_error(self) -> None:
        if not self._ok:
            raise ProtocolError(self.message or DEFAULT_STATUS_MESSAGE, status=self.status)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoapResponse):
            return NotImplemented
        return (self._ok, self._data, self.message, self.status) == (
            other._ok, other._data, other.message, other.status)

    def __repr__(self) -> str:
        if self._ok:
            return f"CoapResponse.success({self._data!r})"
        return f"CoapResponse.error({self.message!r})"


class CoapClient:
    def __init__(self, binary: str = DEFAULT_COAP_BINARY, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self._binary = binary
        self._timeout = timeout

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    async def request(self, endpoint: str, options: RequestOptions) -> CoapResponse:
        """Run one request against ``endpoint`` and classify the result."""
        logger.debug("coap %r -> %s", options, endpoint)
        stdout, stderr = await self._execute([*options.to_args(), endpoint])
        response = self.classify(stdout, stderr)
        logger.debug("coap %s <- %r", endpoint, response)
        return response

    async def _execute(self, args: list[str]) -> tuple[bytes, bytes]:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._binary, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TransportError(f"Failed to run {self._binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise TransportError(f"{self._binary} timed out after {self._timeout}s")
        return stdout, stderr

    @staticmethod
    def classify(stdout: bytes, stderr: bytes) -> CoapResponse:
        """Turn the two output streams of ``coap-client`` into a response.

        A payload on stdout is always a success. Without one, stderr carries
        the status line as its second line; output of two lines or fewer is
        an acknowledgement with no body and counts as an empty success.
        """
        if len(stdout) > 0:
            try:
                return CoapResponse.success(json.loads(stdout.decode("utf-8")))
            except UnicodeDecodeError as e:
                raise TransportError(f"Response payload is not valid UTF-8: {e}") from e
            except json.JSONDecodeError as e:
                raise TransportError(f"Malformed JSON payload: {e}") from e

        try:
            text = stderr.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(f"Diagnostic output is not valid UTF-8: {e}") from e

        lines = text.split("\n")
        if len(lines) > 2:
            status = (lines[1].split() or [""])[0].replace(".", "")
            return CoapResponse.error(STATUS_MESSAGES.get(status, DEFAULT_STATUS_MESSAGE), status=status)
        return CoapResponse.success({})
