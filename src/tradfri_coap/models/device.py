"""
Device models: gateway JSON uses numeric string keys, mapped through aliases.
"""

from __future__ import annotations

import weakref
from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, PrivateAttr, StrictInt, field_validator

from tradfri_coap.errors import TradfriError

LIGHT_CONTROL = "3311"


class BulbTemperature(str, Enum):
    WHITE = "f5faf6"
    WARM = "f1e0b5"
    GLOW = "efd275"


class DeviceState(IntEnum):
    OFF = 0
    ON = 1


class BulbData(BaseModel):
    """One entry of the light control (3311) array."""
    status: DeviceState = Field(alias="5850")
    temperature: BulbTemperature = Field(alias="5706")

    # Unknown attributes are kept so a PUT writes the whole object back.
    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("status", mode="before")
    @classmethod
    def _integer_status(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("power state must be the integer 0 or 1")
        return value

    def with_status(self, status: DeviceState) -> BulbData:
        return self.model_copy(update={"status": status})

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Device(BaseModel):
    id: StrictInt = Field(alias="9003", ge=0)
    name: str = Field(alias="9001")
    data: BulbData = Field(alias=LIGHT_CONTROL)

    model_config = {"populate_by_name": True}

    _gateway: Optional[weakref.ReferenceType] = PrivateAttr(default=None)

    @field_validator("data", mode="before")
    @classmethod
    def _first_light(cls, value: Any) -> Any:
        if not isinstance(value, list) or not value:
            raise ValueError("light control must be a non-empty array")
        return value[0]

    @property
    def is_on(self) -> bool:
        return self.data.status == DeviceState.ON

    def bind(self, gateway: Any) -> Device:
        """Attach the session used by turn_on/turn_off. Only a weak reference is kept."""
        self._gateway = weakref.ref(gateway)
        return self

    def state_payload(self, status: DeviceState) -> dict[str, Any]:
        return {LIGHT_CONTROL: [self.data.with_status(status).to_wire()]}

    def turn_on(self, gateway: Any = None) -> Any:
        return self._modify(DeviceState.ON, gateway)

    def turn_off(self, gateway: Any = None) -> Any:
        return self._modify(DeviceState.OFF, gateway)

    def _modify(self, status: DeviceState, gateway: Any) -> Any:
        if gateway is None:
            gateway = self._gateway() if self._gateway is not None else None
        if gateway is None:
            raise TradfriError("unbound_device", f"Device {self.id} is not bound to a gateway.")
        return gateway.set_device_state(self.id, self.state_payload(status))
