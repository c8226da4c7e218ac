"""Stable public API for building tooling on top of lifxctl.

This module is the supported integration surface for third-party callers that
want to drive the session with their own client, prompter, or renderer.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from lifxctl.clients.base import DeviceClient
from lifxctl.clients.lan import LanDeviceClient
from lifxctl.core.context import SessionContext
from lifxctl.core.errors import (
    DeviceOperationFailed,
    DiscoveryError,
    InvalidField,
    LifxctlError,
    NoDevicesFound,
    UnknownWaveform,
)
from lifxctl.core.fields import waveform_kind
from lifxctl.core.handlers import dispatch, execute, refresh_states
from lifxctl.core.model import (
    Action,
    ActionRequest,
    ColorSpec,
    Device,
    Exit,
    FieldDefaults,
    GetState,
    ListDevices,
    ReadyInfo,
    SetColor,
    SetLabel,
    SetPower,
    SetWaveform,
    StateOutcome,
    WaveformKind,
    WaveformSpec,
)
from lifxctl.core.session import SessionController
from lifxctl.core.targets import lights_menu
from lifxctl.ui.base import Prompter, Renderer
from lifxctl.ui.render import PlainRenderer, RichRenderer

__all__ = [
    "LifxctlError",
    "DiscoveryError",
    "NoDevicesFound",
    "UnknownWaveform",
    "DeviceOperationFailed",
    "InvalidField",
    "Action",
    "ActionRequest",
    "ColorSpec",
    "Device",
    "Exit",
    "GetState",
    "ListDevices",
    "ReadyInfo",
    "SetColor",
    "SetLabel",
    "SetPower",
    "SetWaveform",
    "StateOutcome",
    "WaveformKind",
    "WaveformSpec",
    "DeviceClient",
    "LanDeviceClient",
    "Prompter",
    "Renderer",
    "PlainRenderer",
    "RichRenderer",
    "FieldDefaults",
    "SessionContext",
    "SessionController",
    "dispatch",
    "execute",
    "refresh_states",
    "lights_menu",
    "waveform_kind",
]
