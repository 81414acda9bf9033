"""
tradfri-coap: gateway client for CoAP-over-DTLS smart lighting.

Shells out to libcoap's ``coap-client`` for the DTLS transport.
"""

from tradfri_coap.client import Gateway, AsyncGateway
from tradfri_coap.errors import TradfriError, TransportError, ProtocolError, AuthError, DecodeError
from tradfri_coap.models.device import Device, BulbData, BulbTemperature, DeviceState
from tradfri_coap.transport.coap import CoapClient, CoapResponse, Method, RequestOptions

__version__ = "0.1.0"
__all__ = [
    "Gateway",
    "AsyncGateway",
    "TradfriError",
    "TransportError",
    "ProtocolError",
    "AuthError",
    "DecodeError",
    "Device",
    "BulbData",
    "BulbTemperature",
    "DeviceState",
    "CoapClient",
    "CoapResponse",
    "Method",
    "RequestOptions",
]
