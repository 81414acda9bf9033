"""
Devices API: the gateway's device collection (15001) and its members.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from tradfri_coap import endpoints
from tradfri_coap.auth import Credentials
from tradfri_coap.errors import DecodeError
from tradfri_coap.models.device import Device
from tradfri_coap.transport.coap import CoapClient, Method


class DevicesAPI:
    def __init__(self, coap: CoapClient, host: str, credentials: Credentials):
        self._coap = coap
        self._host = host
        self._credentials = credentials

    async def list_ids(self) -> list[int]:
        """Device IDs known to the gateway. Non-integer entries are skipped."""
        options = self._credentials.options().method(Method.GET)
        response = await self._coap.request(endpoints.uri(self._host, endpoints.DEVICES), options)
        response.raise_for_error()

        data = response.data()
        if not isinstance(data, list):
            raise DecodeError("Device list is not an array.", {"response": data})
        return [v for v in data if isinstance(v, int) and not isinstance(v, bool) and v >= 0]

    async def get(self, device_id: int) -> Device:
        options = self._credentials.options().method(Method.GET)
        response = await self._coap.request(endpoints.uri(self._host, endpoints.DEVICES, device_id), options)
        response.raise_for_error()

        try:
            return Device.model_validate(response.data())
        except ValidationError as e:
            raise DecodeError(f"Unexpected device representation for {device_id}: {e}") from e

    async def set_state(self, device_id: int, payload: Any) -> None:
        body = json.dumps(payload, separators=(",", ":"))
        options = self._credentials.options().method(Method.PUT).payload(body)
        response = await self._coap.request(endpoints.uri(self._host, endpoints.DEVICES, device_id), options)
        response.raise_for_error()
