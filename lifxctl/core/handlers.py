"""Action handlers: collect an action request from prompts, then execute it."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from lifxctl.core.context import SessionContext
from lifxctl.core.errors import DeviceOperationFailed
from lifxctl.core.fields import color_menu, label_menu, power_menu, waveform_menu
from lifxctl.core.model import (
    Action,
    ActionRequest,
    Device,
    Exit,
    GetState,
    ListDevices,
    SetColor,
    SetLabel,
    SetPower,
    SetWaveform,
    StateOutcome,
)
from lifxctl.core.targets import lights_menu, snapshot

LOGGER = logging.getLogger(__name__)

DEVICE_HEADERS = ("Id", "Label", "Address", "Port", "Legacy", "Connectivity")
STATE_HEADERS = ("Id", "Connectivity", "Power", "Color")


def _connectivity(device: Device) -> str:
    return "online" if device.connectivity else "offline"


def device_rows(devices: tuple[Device, ...] | list[Device]) -> list[tuple[str, ...]]:
    return [
        (
            device.id,
            device.label,
            device.address,
            str(device.port) if device.port else "N/A",
            "true" if device.legacy else "false",
            _connectivity(device),
        )
        for device in devices
    ]


def state_rows(outcomes: list[StateOutcome]) -> list[tuple[str, ...]]:
    rows: list[tuple[str, ...]] = []
    for outcome in outcomes:
        if not outcome.ok:
            continue
        device = outcome.device
        rows.append(
            (
                device.id,
                _connectivity(device),
                "on" if device.power else "off",
                device.color.describe() if device.color else "N/A",
            )
        )
    return rows


async def collect_list_devices(ctx: SessionContext) -> ListDevices:
    return ListDevices()


async def collect_get_state(ctx: SessionContext) -> GetState:
    return GetState(targets=await lights_menu(ctx))


async def collect_set_label(ctx: SessionContext) -> SetLabel:
    (target,) = await lights_menu(ctx, single=True)
    ctx.renderer.info(f"Current label: {target.label}")
    return SetLabel(target=target, label=await label_menu(ctx))


async def collect_set_power(ctx: SessionContext) -> SetPower:
    targets = await lights_menu(ctx)
    return SetPower(targets=targets, power=await power_menu(ctx))


async def collect_set_color(ctx: SessionContext) -> SetColor:
    targets = await lights_menu(ctx)
    return SetColor(targets=targets, color=await color_menu(ctx))


async def collect_set_waveform(ctx: SessionContext) -> SetWaveform:
    targets = await lights_menu(ctx)
    return SetWaveform(targets=targets, waveform=await waveform_menu(ctx))


async def collect_exit(ctx: SessionContext) -> Exit:
    return Exit()


COLLECTORS: dict[Action, Callable[[SessionContext], Awaitable[ActionRequest]]] = {
    Action.GET_LIGHT_LIST: collect_list_devices,
    Action.GET_LIGHT_STATE: collect_get_state,
    Action.SET_LIGHT_LABEL: collect_set_label,
    Action.SET_LIGHT_POWER: collect_set_power,
    Action.SET_LIGHT_COLOR: collect_set_color,
    Action.SET_WAVEFORM: collect_set_waveform,
    Action.EXIT: collect_exit,
}


def print_lights(ctx: SessionContext) -> None:
    ctx.renderer.table("Lights", DEVICE_HEADERS, device_rows(snapshot(ctx)))


async def refresh_states(ctx: SessionContext, devices: tuple[Device, ...]) -> list[StateOutcome]:
    """Refresh each device in turn, recording one outcome per device."""
    outcomes: list[StateOutcome] = []
    for device in devices:
        try:
            await ctx.client.refresh_state(device)
        except DeviceOperationFailed as exc:
            LOGGER.debug("State refresh failed for %s", device.id, exc_info=True)
            outcomes.append(StateOutcome(device=device, error=str(exc)))
        else:
            outcomes.append(StateOutcome(device=device))
    return outcomes


async def print_lights_state(ctx: SessionContext, devices: tuple[Device, ...]) -> list[StateOutcome]:
    outcomes = await refresh_states(ctx, devices)
    ctx.renderer.table("Lights state", STATE_HEADERS, state_rows(outcomes))
    for outcome in outcomes:
        if not outcome.ok:
            ctx.renderer.error(f"{outcome.device.id}: {outcome.error}")
    return outcomes


async def execute(ctx: SessionContext, request: ActionRequest) -> None:
    client = ctx.client
    if isinstance(request, ListDevices):
        print_lights(ctx)
    elif isinstance(request, GetState):
        await print_lights_state(ctx, request.targets)
    elif isinstance(request, SetLabel):
        await client.set_label(request.target, request.label)
        ctx.renderer.info(f"Label of {request.target.id} set to '{request.label}'")
    elif isinstance(request, SetPower):
        for device in request.targets:
            await client.set_power(device, request.power)
        ctx.renderer.info(f"Power {'on' if request.power else 'off'} sent to {_ids(request.targets)}")
    elif isinstance(request, SetColor):
        for device in request.targets:
            await client.set_color(device, request.color)
        ctx.renderer.info(f"Color {request.color.describe()} sent to {_ids(request.targets)}")
    elif isinstance(request, SetWaveform):
        for device in request.targets:
            await client.set_waveform(device, request.waveform)
        ctx.renderer.info(f"Waveform {request.waveform.kind.name} sent to {_ids(request.targets)}")
    elif isinstance(request, Exit):
        return
    else:
        raise TypeError(f"Unsupported action request {request!r}")


async def dispatch(ctx: SessionContext, action: Action) -> ActionRequest:
    request = await COLLECTORS[action](ctx)
    await execute(ctx, request)
    return request


def _ids(devices: tuple[Device, ...]) -> str:
    return ", ".join(device.id for device in devices)
