"""Basic unit tests for tradfri-coap package."""

from tradfri_coap import (
    AsyncGateway,
    Gateway,
    TradfriError,
    TransportError,
    ProtocolError,
    AuthError,
    DecodeError,
    Method,
    __version__,
)
from tradfri_coap import endpoints


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Gateway is not None
    assert AsyncGateway is not None


def test_error_hierarchy():
    assert issubclass(TransportError, TradfriError)
    assert issubclass(ProtocolError, TradfriError)
    assert issubclass(AuthError, TradfriError)
    assert issubclass(DecodeError, TradfriError)


def test_error_attributes():
    err = TradfriError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    rejected = ProtocolError("Bad request.", status="404")
    assert rejected.code == "protocol_error"
    assert rejected.details == {"status": "404"}


def test_method_tokens():
    assert Method.GET.value == "get"
    assert Method.POST.value == "post"
    assert Method.PUT.value == "put"


def test_endpoint_uri():
    assert endpoints.uri("10.0.0.2", endpoints.AUTHENTICATE) == "coaps://10.0.0.2:5684/15011/9063"
    assert endpoints.uri("10.0.0.2", endpoints.DEVICES, 65537) == "coaps://10.0.0.2:5684/15001/65537"
