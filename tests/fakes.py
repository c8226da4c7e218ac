from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from lifxctl.core.context import SessionContext
from lifxctl.core.errors import DeviceOperationFailed, DiscoveryError
from lifxctl.core.model import ColorSpec, Device, ReadyInfo, WaveformSpec


class FakeClient:
    def __init__(
        self,
        devices: Sequence[Device] = (),
        *,
        failing: Sequence[str] = (),
        never_ready: bool = False,
    ) -> None:
        self.devices = list(devices)
        self.failing = set(failing)
        self.never_ready = never_ready
        self.fatal_error: DiscoveryError | None = None
        self.calls: list[tuple[str, str, Any]] = []
        self.started = False
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0

    async def start(self) -> None:
        self.started = True

    async def wait_ready(self) -> ReadyInfo:
        if self.never_ready:
            await asyncio.sleep(3600)
        if self.fatal_error is not None:
            raise self.fatal_error
        return ReadyInfo(address="0.0.0.0", port=56700)

    async def close(self) -> None:
        self.closed = True

    def catalog(self) -> list[Device]:
        return list(self.devices)

    def device(self, device_id: str) -> Device | None:
        for device in self.devices:
            if device.id == device_id:
                return device
        return None

    async def _op(self, operation: str, device: Device, value: Any = None) -> None:
        self.calls.append((operation, device.id, value))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0.001)
            if device.id in self.failing:
                raise DeviceOperationFailed(f"{operation} failed for {device.id}: unreachable")
        finally:
            self.in_flight -= 1

    async def refresh_state(self, device: Device) -> None:
        await self._op("refresh_state", device)
        device.connectivity = True
        device.power = True
        device.color = ColorSpec(hue=120, saturation=50, brightness=25, kelvin=3500)

    async def set_label(self, device: Device, label: str) -> None:
        await self._op("set_label", device, label)
        device.label = label

    async def set_power(self, device: Device, power: bool) -> None:
        await self._op("set_power", device, power)

    async def set_color(self, device: Device, color: ColorSpec) -> None:
        await self._op("set_color", device, color)

    async def set_waveform(self, device: Device, waveform: WaveformSpec) -> None:
        await self._op("set_waveform", device, waveform)


class FakePrompter:
    """Replays scripted answers; a callable answer is called with (message, choices).

    Running out of answers behaves like end of input.
    """

    def __init__(self, answers: Sequence[Any] = ()) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str, tuple[str, ...], Any]] = []

    def _next(self, kind: str, message: str, choices: Sequence[str], default: Any) -> Any:
        self.calls.append((kind, message, tuple(choices), default))
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if callable(answer):
            answer = answer(message, tuple(choices))
        return answer

    async def select(self, message: str, choices: Sequence[str], default: str | None = None) -> str:
        return self._next("select", message, choices, default)

    async def text(self, message: str, default: str = "") -> str:
        return self._next("text", message, (), default)

    async def number(self, message: str, default: float) -> float:
        return float(self._next("number", message, (), default))

    def messages(self) -> list[str]:
        return [message for _, message, _, _ in self.calls]


class FakeRenderer:
    def __init__(self) -> None:
        self.tables: list[tuple[str, tuple[str, ...], list[tuple[str, ...]]]] = []
        self.infos: list[str] = []
        self.errors: list[str] = []

    def table(self, title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        self.tables.append((title, tuple(headers), [tuple(row) for row in rows]))

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def make_devices(*ids: str) -> list[Device]:
    return [
        Device(id=device_id, label=f"Light {device_id}", address="192.168.1.10", port=56700, connectivity=True)
        for device_id in ids
    ]


def make_ctx(
    devices: Sequence[Device] = (),
    answers: Sequence[Any] = (),
    **client_kwargs: Any,
) -> tuple[SessionContext, FakeClient, FakePrompter, FakeRenderer]:
    client = FakeClient(devices, **client_kwargs)
    prompter = FakePrompter(answers)
    renderer = FakeRenderer()
    return SessionContext(client=client, prompter=prompter, renderer=renderer), client, prompter, renderer
