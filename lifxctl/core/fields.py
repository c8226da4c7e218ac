"""Prompted field collection with range validation."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TypeVar

from lifxctl.core.context import SessionContext
from lifxctl.core.errors import InvalidField, UnknownWaveform
from lifxctl.core.model import ColorSpec, WaveformKind, WaveformSpec

T = TypeVar("T")

MAX_LABEL_BYTES = 32
KELVIN_MIN = 1000
KELVIN_MAX = 10000
POWER_CHOICES = ("on", "off")
BOOL_CHOICES = ("true", "false")

_WAVEFORM_KINDS: dict[str, WaveformKind] = {
    "SAW": WaveformKind.SAW,
    "SINE": WaveformKind.SINE,
    "HALF_SINE": WaveformKind.HALF_SINE,
    "TRIANGLE": WaveformKind.TRIANGLE,
    "PULSE": WaveformKind.PULSE,
}
WAVEFORM_NAMES = tuple(_WAVEFORM_KINDS)


def waveform_kind(name: str) -> WaveformKind:
    try:
        return _WAVEFORM_KINDS[name]
    except KeyError:
        allowed = ", ".join(WAVEFORM_NAMES)
        raise UnknownWaveform(f"Unknown waveform '{name}'. Allowed: {allowed}") from None


def validate_hue(value: float) -> float:
    if not 0 <= value <= 360:
        raise InvalidField(f"hue must be between 0 and 360, got {value:g}")
    return value % 360


def _percent(name: str) -> Callable[[float], float]:
    def _validate(value: float) -> float:
        if not 0 <= value <= 100:
            raise InvalidField(f"{name} must be between 0 and 100, got {value:g}")
        return value

    return _validate


validate_saturation = _percent("saturation")
validate_brightness = _percent("brightness")


def _positive_int(name: str) -> Callable[[float], int]:
    def _validate(value: float) -> int:
        if not math.isfinite(value) or value <= 0 or value != int(value):
            raise InvalidField(f"{name} must be a positive whole number, got {value:g}")
        return int(value)

    return _validate


validate_period = _positive_int("period")
validate_cycles = _positive_int("cycles")


def validate_kelvin(value: float) -> int:
    if not KELVIN_MIN <= value <= KELVIN_MAX or value != int(value):
        raise InvalidField(
            f"kelvin must be a whole number between {KELVIN_MIN} and {KELVIN_MAX}, got {value:g}"
        )
    return int(value)


def validate_skew_ratio(value: float) -> float:
    if not 0 <= value <= 1:
        raise InvalidField(f"skew ratio must be between 0 and 1, got {value:g}")
    return value


def validate_label(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_LABEL_BYTES:
        raise InvalidField(f"label must fit in {MAX_LABEL_BYTES} bytes")
    return value


async def _ask_number(
    ctx: SessionContext,
    message: str,
    default: float,
    validate: Callable[[float], T],
) -> T:
    while True:
        value = await ctx.prompter.number(message, default)
        try:
            return validate(value)
        except InvalidField as exc:
            ctx.renderer.error(str(exc))


async def _ask_color(ctx: SessionContext, defaults: ColorSpec) -> ColorSpec:
    hue = await _ask_number(ctx, "hue?", defaults.hue, validate_hue)
    saturation = await _ask_number(ctx, "saturation?", defaults.saturation, validate_saturation)
    brightness = await _ask_number(ctx, "brightness?", defaults.brightness, validate_brightness)
    kelvin = await _ask_number(ctx, "kelvin?", defaults.kelvin, validate_kelvin)
    return ColorSpec(hue=hue, saturation=saturation, brightness=brightness, kelvin=kelvin)


async def label_menu(ctx: SessionContext) -> str:
    while True:
        answer = await ctx.prompter.text("Label?")
        try:
            return validate_label(answer)
        except InvalidField as exc:
            ctx.renderer.error(str(exc))


async def power_menu(ctx: SessionContext) -> bool:
    answer = await ctx.prompter.select("What power?", POWER_CHOICES)
    return answer == "on"


async def color_menu(ctx: SessionContext) -> ColorSpec:
    return await _ask_color(ctx, ctx.defaults.color)


async def waveform_menu(ctx: SessionContext) -> WaveformSpec:
    defaults = ctx.defaults
    transient = await ctx.prompter.select(
        "Is Transient?",
        BOOL_CHOICES,
        default="true" if defaults.transient else "false",
    )
    color = await _ask_color(ctx, defaults.waveform_color)
    period = await _ask_number(ctx, "Period?", defaults.period_ms, validate_period)
    cycles = await _ask_number(ctx, "Cycles?", defaults.cycles, validate_cycles)
    skew_ratio = await _ask_number(ctx, "Skew Ratio?", defaults.skew_ratio, validate_skew_ratio)
    answer = await ctx.prompter.select("Waveform?", WAVEFORM_NAMES)

    return WaveformSpec(
        transient=transient == "true",
        color=color,
        period_ms=period,
        cycles=cycles,
        skew_ratio=skew_ratio,
        kind=waveform_kind(answer),
    )
