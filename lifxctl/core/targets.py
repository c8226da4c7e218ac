"""Target device selection against the live catalog."""

from __future__ import annotations

from lifxctl.core.context import SessionContext
from lifxctl.core.errors import NoDevicesFound
from lifxctl.core.model import Device

ALL_CHOICE = "All"


def snapshot(ctx: SessionContext) -> tuple[Device, ...]:
    """Take a read-only copy of the catalog as it is right now."""
    return tuple(ctx.client.catalog())


async def lights_menu(ctx: SessionContext, *, single: bool = False) -> tuple[Device, ...]:
    """Ask which light(s) to act on.

    The catalog is read once, before prompting, and the answer resolves against
    that copy: choosing "All" targets exactly the devices that were offered.
    """
    devices = snapshot(ctx)
    if not devices:
        raise NoDevicesFound("No lights found")

    choices = [device.id for device in devices]
    if not single:
        choices.append(ALL_CHOICE)

    answer = await ctx.prompter.select("What light?", choices)
    if answer == ALL_CHOICE and not single:
        return devices

    for device in devices:
        if device.id == answer:
            return (device,)
    raise NoDevicesFound(f"No light with id '{answer}'")
