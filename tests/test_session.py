from __future__ import annotations

import asyncio

import pytest
from fakes import make_ctx, make_devices

from lifxctl.core.errors import DiscoveryError
from lifxctl.core.session import ACTION_CHOICES, SessionController


def _menu_prompts(prompter) -> int:
    return prompter.messages().count("What to do?")


def test_action_menu_lists_every_action_in_order() -> None:
    assert ACTION_CHOICES == (
        "GetLightList",
        "GetLightState",
        "SetLightLabel",
        "SetLightPower",
        "SetLightColor",
        "SetWaveform",
        "Exit",
    )


def test_exit_ends_session_with_status_zero() -> None:
    ctx, client, prompter, renderer = make_ctx(make_devices("d1"), answers=["Exit"])

    code = asyncio.run(SessionController(ctx).run())

    assert code == 0
    assert client.started
    assert client.calls == []
    assert _menu_prompts(prompter) == 1
    assert renderer.infos[0] == "Started LIFX listening on 0.0.0.0:56700"


def test_handler_failure_re_presents_menu() -> None:
    ctx, client, prompter, renderer = make_ctx([], answers=["SetLightPower", "GetLightList", "Exit"])

    code = asyncio.run(SessionController(ctx).run())

    assert code == 0
    assert renderer.errors == ["No lights found"]
    assert _menu_prompts(prompter) == 3
    assert renderer.tables[0][0] == "Lights"


def test_device_failure_is_isolated() -> None:
    ctx, client, prompter, renderer = make_ctx(
        make_devices("d1"),
        answers=["SetLightPower", "d1", "off", "Exit"],
        failing=["d1"],
    )

    asyncio.run(SessionController(ctx).run())

    assert renderer.errors == ["set_power failed for d1: unreachable"]
    assert _menu_prompts(prompter) == 2


def test_unknown_waveform_is_isolated() -> None:
    answers = ["SetWaveform", "d1", "false", 0, 0, 100, 3500, 1000, 3, 0, "SQUARE", "Exit"]
    ctx, client, prompter, renderer = make_ctx(make_devices("d1"), answers=answers)

    asyncio.run(SessionController(ctx).run())

    assert client.calls == []
    assert renderer.errors == ["Unknown waveform 'SQUARE'. Allowed: SAW, SINE, HALF_SINE, TRIANGLE, PULSE"]
    assert _menu_prompts(prompter) == 2


def test_unknown_option_re_presents_menu() -> None:
    ctx, _, prompter, renderer = make_ctx(make_devices("d1"), answers=["Dance", "Exit"])

    asyncio.run(SessionController(ctx).run())

    assert renderer.errors == ["Unknown option"]
    assert _menu_prompts(prompter) == 2


def test_end_of_input_is_not_swallowed() -> None:
    ctx, _, _, _ = make_ctx(make_devices("d1"), answers=["SetLightPower"])

    with pytest.raises(EOFError):
        asyncio.run(SessionController(ctx).run())


def test_readiness_timeout_is_a_discovery_error() -> None:
    ctx, client, prompter, _ = make_ctx(never_ready=True)

    with pytest.raises(DiscoveryError):
        asyncio.run(SessionController(ctx, readiness_timeout_s=0.01).run())

    assert client.closed
    assert prompter.calls == []


def test_fatal_client_error_tears_down_and_stops() -> None:
    ctx, client, prompter, _ = make_ctx(make_devices("d1"), answers=[])

    def _fail_discovery(message, choices):
        client.fatal_error = DiscoveryError("socket closed")
        return "GetLightList"

    prompter.answers.extend([_fail_discovery, "Exit"])

    with pytest.raises(DiscoveryError, match="socket closed"):
        asyncio.run(SessionController(ctx).run())

    assert client.closed
    assert _menu_prompts(prompter) == 1


def test_failing_discovery_before_ready() -> None:
    ctx, client, _, _ = make_ctx()
    client.fatal_error = DiscoveryError("no network")

    with pytest.raises(DiscoveryError):
        asyncio.run(SessionController(ctx).run())

    assert client.closed


def test_discovery_failure_while_prompting_sends_nothing() -> None:
    ctx, client, prompter, renderer = make_ctx(make_devices("d1", "d2"), answers=["SetLightPower"])

    def _fail_discovery(message, choices):
        client.fatal_error = DiscoveryError("socket closed")
        return "All"

    prompter.answers.extend([_fail_discovery, "on", "Exit"])

    with pytest.raises(DiscoveryError, match="socket closed"):
        asyncio.run(SessionController(ctx).run())

    assert client.calls == []
    assert client.closed
    assert renderer.errors == []
    assert prompter.messages() == ["What to do?", "What light?", "What power?"]
