"""Device client interfaces."""

from __future__ import annotations

from typing import Protocol

from lifxctl.core.errors import DiscoveryError
from lifxctl.core.model import ColorSpec, Device, ReadyInfo, WaveformSpec


class DeviceClient(Protocol):
    @property
    def fatal_error(self) -> DiscoveryError | None:
        """Error that stopped discovery, if any."""

    async def start(self) -> None:
        """Begin discovery in the background."""

    async def wait_ready(self) -> ReadyInfo:
        """Suspend until the client can serve the catalog."""

    async def close(self) -> None:
        """Stop background work and release network resources."""

    def catalog(self) -> list[Device]:
        """Return a snapshot of the currently known devices, in discovery order."""

    def device(self, device_id: str) -> Device | None:
        ...

    async def refresh_state(self, device: Device) -> None:
        """Refresh power, color, label and connectivity of `device` in place."""

    async def set_label(self, device: Device, label: str) -> None:
        ...

    async def set_power(self, device: Device, power: bool) -> None:
        ...

    async def set_color(self, device: Device, color: ColorSpec) -> None:
        ...

    async def set_waveform(self, device: Device, waveform: WaveformSpec) -> None:
        ...
