"""LAN device client backed by the lifx-async library."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from lifxctl.core.errors import DeviceOperationFailed, DiscoveryError
from lifxctl.core.model import ColorSpec, Device, ReadyInfo, WaveformSpec

LIFX_PORT = 56700
LOGGER = logging.getLogger(__name__)

Discoverer = Callable[..., AsyncIterator[Any]]


class LanDeviceClient:
    def __init__(
        self,
        *,
        start_discovery: bool = True,
        debug: bool = False,
        discovery_timeout_s: float = 5.0,
        broadcast_address: str = "255.255.255.255",
        rediscover_interval_s: float = 30.0,
        operation_timeout_s: float = 5.0,
        discoverer: Discoverer | None = None,
    ) -> None:
        self.start_discovery = start_discovery
        self.debug = debug
        self.discovery_timeout_s = discovery_timeout_s
        self.broadcast_address = broadcast_address
        self.rediscover_interval_s = rediscover_interval_s
        self.operation_timeout_s = operation_timeout_s
        self._discoverer = discoverer
        self._devices: dict[str, Device] = {}
        self._lights: dict[str, Any] = {}
        self._ready = asyncio.Event()
        self._fatal: DiscoveryError | None = None
        self._task: asyncio.Task[None] | None = None
        if debug:
            logging.getLogger("lifx").setLevel(logging.DEBUG)

    @property
    def fatal_error(self) -> DiscoveryError | None:
        return self._fatal

    async def start(self) -> None:
        if self._task is not None or self._ready.is_set():
            return
        if not self.start_discovery:
            LOGGER.info("Discovery disabled; starting with an empty catalog")
            self._ready.set()
            return
        self._task = asyncio.create_task(self._discovery_loop(), name="lifxctl-discovery")

    async def wait_ready(self) -> ReadyInfo:
        await self._ready.wait()
        if self._fatal is not None:
            raise self._fatal
        return ReadyInfo(address=self.broadcast_address, port=LIFX_PORT)

    async def close(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def catalog(self) -> list[Device]:
        return list(self._devices.values())

    def device(self, device_id: str) -> Device | None:
        return self._devices.get(device_id)

    async def refresh_state(self, device: Device) -> None:
        try:
            color, power, label = await self._call(device, "GetState", lambda light: light.get_color())
        except DeviceOperationFailed:
            device.connectivity = False
            raise
        device.label = label
        device.power = bool(power)
        device.color = _color_from_hsbk(color)
        device.connectivity = True

    async def set_label(self, device: Device, label: str) -> None:
        await self._call(device, "SetLabel", lambda light: light.set_label(label))
        device.label = label

    async def set_power(self, device: Device, power: bool) -> None:
        await self._call(device, "SetPower", lambda light: light.set_power(power))
        device.power = power

    async def set_color(self, device: Device, color: ColorSpec) -> None:
        await self._call(device, "SetColor", lambda light: light.set_color(_color_to_hsbk(color)))
        device.color = color

    async def set_waveform(self, device: Device, waveform: WaveformSpec) -> None:
        async def _send(light: Any) -> Any:
            hsbk = _color_to_hsbk(waveform.color)
            from lifx.protocol.protocol_types import LightWaveform

            return await light.set_waveform(
                color=hsbk,
                period=waveform.period_ms / 1000,
                cycles=waveform.cycles,
                waveform=LightWaveform(int(waveform.kind)),
                transient=waveform.transient,
                skew_ratio=waveform.skew_ratio,
            )

        await self._call(device, "SetWaveform", _send)

    async def _call(self, device: Device, operation: str, run: Callable[[Any], Awaitable[Any]]) -> Any:
        light = self._lights.get(device.id)
        if light is None:
            raise DeviceOperationFailed(f"{operation} failed for {device.id}: device was never discovered")
        try:
            return await asyncio.wait_for(run(light), timeout=self.operation_timeout_s)
        except TimeoutError as exc:
            device.connectivity = False
            raise DeviceOperationFailed(
                f"{operation} timed out for {device.id} after {self.operation_timeout_s:g}s"
            ) from exc
        except Exception as exc:
            raise DeviceOperationFailed(f"{operation} failed for {device.id}: {exc}") from exc

    async def _discovery_loop(self) -> None:
        try:
            while True:
                found = await self._discover_once()
                if not self._ready.is_set():
                    LOGGER.info("Initial discovery found %d device(s)", len(self._devices))
                    self._ready.set()
                await self._refresh_found(found)
                if self.rediscover_interval_s <= 0:
                    return
                await asyncio.sleep(self.rediscover_interval_s)
        except DiscoveryError as exc:
            self._fail(exc)
        except Exception as exc:
            LOGGER.exception("Discovery loop crashed")
            self._fail(DiscoveryError(f"LAN discovery failed: {exc}"))

    async def _discover_once(self) -> list[Device]:
        """Record every light that answers one discovery pass, without contacting them."""
        discover = self._resolve_discoverer()
        found: list[Device] = []
        async for light in discover(
            timeout=self.discovery_timeout_s,
            broadcast_address=self.broadcast_address,
        ):
            serial = str(light.serial)
            self._lights[serial] = light
            device = self._devices.get(serial)
            if device is None:
                device = Device(id=serial)
                self._devices[serial] = device
                LOGGER.debug("Discovered %s at %s:%s", serial, light.ip, light.port)
            device.address = str(light.ip)
            device.port = light.port
            device.connectivity = True
            found.append(device)

        seen = {device.id for device in found}
        for serial, device in self._devices.items():
            if serial not in seen and device.connectivity:
                LOGGER.info("Device %s stopped answering discovery", serial)
                device.connectivity = False
        return found

    async def _refresh_found(self, devices: list[Device]) -> None:
        for device in devices:
            try:
                await self.refresh_state(device)
            except DeviceOperationFailed as exc:
                LOGGER.warning("Could not read state after discovery: %s", exc)

    def _resolve_discoverer(self) -> Discoverer:
        if self._discoverer is not None:
            return self._discoverer
        try:
            from lifx import discover
        except Exception as exc:  # pragma: no cover - import failure path
            raise DiscoveryError(
                "LAN discovery requires 'lifx-async'. Install dependency and retry."
            ) from exc
        self._discoverer = discover
        return discover

    def _fail(self, error: DiscoveryError) -> None:
        LOGGER.error("%s", error)
        self._fatal = error
        self._ready.set()


def _color_to_hsbk(color: ColorSpec) -> Any:
    from lifx import HSBK

    return HSBK(
        hue=color.hue,
        saturation=color.saturation / 100,
        brightness=color.brightness / 100,
        kelvin=color.kelvin,
    )


def _color_from_hsbk(hsbk: Any) -> ColorSpec:
    return ColorSpec(
        hue=round(float(hsbk.hue), 1),
        saturation=round(float(hsbk.saturation) * 100, 1),
        brightness=round(float(hsbk.brightness) * 100, 1),
        kelvin=int(hsbk.kelvin),
    )
