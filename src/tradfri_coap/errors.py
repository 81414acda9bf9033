"""
Tradfri error types.

Transport errors mean the gateway could not be reached, protocol errors
mean it answered and rejected the request.
"""

from typing import Any, Optional


class TradfriError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(TradfriError):
    def __init__(self, message: str):
        super().__init__("transport_error", message)


class ProtocolError(TradfriError):
    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__("protocol_error", message, {"status": status} if status else None)
        self.status = status


class AuthError(TradfriError):
    def __init__(self, message: str, code: str = "auth_error"):
        super().__init__(code, message)


class DecodeError(TradfriError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)
