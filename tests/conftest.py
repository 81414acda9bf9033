import asyncio
from typing import Any

import pytest

from tradfri_coap.transport.coap import CoapClient, CoapResponse, RequestOptions


class FakeCoapClient(CoapClient):
    """Replays scripted responses and records every request."""

    def __init__(self, *responses: CoapResponse):
        super().__init__()
        self.responses = list(responses)
        self.calls: list[tuple[str, list[tuple[str, str]]]] = []

    def queue(self, *responses: CoapResponse) -> None:
        self.responses.extend(responses)

    async def request(self, endpoint: str, options: RequestOptions) -> CoapResponse:
        self.calls.append((endpoint, options.pairs()))
        await asyncio.sleep(0)
        return self.responses.pop(0)


def bulb(device_id: int = 65537, status: int = 1, temperature: str = "f1e0b5", **extra: Any) -> dict[str, Any]:
    return {"9003": device_id, "9001": "Desk lamp", "3311": [{"5850": status, "5706": temperature, **extra}]}


@pytest.fixture
def coap() -> FakeCoapClient:
    return FakeCoapClient()


@pytest.fixture
def key_file(tmp_path):
    return tmp_path / ".env"
