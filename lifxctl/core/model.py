"""Core data models used across the client, handlers, and session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Action(str, Enum):
    GET_LIGHT_LIST = "GetLightList"
    GET_LIGHT_STATE = "GetLightState"
    SET_LIGHT_LABEL = "SetLightLabel"
    SET_LIGHT_POWER = "SetLightPower"
    SET_LIGHT_COLOR = "SetLightColor"
    SET_WAVEFORM = "SetWaveform"
    EXIT = "Exit"


class WaveformKind(IntEnum):
    """Waveform kinds, valued as on the LAN protocol."""

    SAW = 0
    SINE = 1
    HALF_SINE = 2
    TRIANGLE = 3
    PULSE = 4


@dataclass(frozen=True)
class ColorSpec:
    hue: float
    saturation: float
    brightness: float
    kelvin: int

    def describe(self) -> str:
        return (
            f"hue={self.hue:g} saturation={self.saturation:g} "
            f"brightness={self.brightness:g} kelvin={self.kelvin}"
        )


@dataclass(frozen=True)
class WaveformSpec:
    transient: bool
    color: ColorSpec
    period_ms: int
    cycles: int
    skew_ratio: float
    kind: WaveformKind


@dataclass(frozen=True)
class FieldDefaults:
    """Values offered as defaults by the color and waveform prompts."""

    color: ColorSpec = ColorSpec(hue=0, saturation=50, brightness=50, kelvin=3500)
    waveform_color: ColorSpec = ColorSpec(hue=0, saturation=0, brightness=100, kelvin=3500)
    transient: bool = False
    period_ms: int = 1000
    cycles: int = 3
    skew_ratio: float = 0.0


@dataclass
class Device:
    """Live view of one discovered light.

    Instances are owned by the device client, which updates them in place when
    state is refreshed. Everything else treats them as read-only.
    """

    id: str
    label: str = ""
    address: str = ""
    port: int | None = None
    legacy: bool = False
    connectivity: bool = False
    power: bool = False
    color: ColorSpec | None = None


@dataclass(frozen=True)
class ReadyInfo:
    address: str
    port: int


@dataclass(frozen=True)
class StateOutcome:
    device: Device
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ListDevices:
    pass


@dataclass(frozen=True)
class GetState:
    targets: tuple[Device, ...]


@dataclass(frozen=True)
class SetLabel:
    target: Device
    label: str


@dataclass(frozen=True)
class SetPower:
    targets: tuple[Device, ...]
    power: bool


@dataclass(frozen=True)
class SetColor:
    targets: tuple[Device, ...]
    color: ColorSpec


@dataclass(frozen=True)
class SetWaveform:
    targets: tuple[Device, ...]
    waveform: WaveformSpec


@dataclass(frozen=True)
class Exit:
    pass


ActionRequest = ListDevices | GetState | SetLabel | SetPower | SetColor | SetWaveform | Exit
