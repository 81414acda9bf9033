"""Gateway resource paths."""

COAP_PORT = 5684

AUTHENTICATE = "15011/9063"
DEVICES = "15001"


def uri(host: str, *path: object) -> str:
    """Build ``coaps://<host>:5684/<path>``."""
    return f"coaps://{host}:{COAP_PORT}/" + "/".join(str(p) for p in path)
