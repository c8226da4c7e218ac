"""Session-wide collaborators handed to the controller and every action handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from lifxctl.clients.base import DeviceClient
from lifxctl.core.model import FieldDefaults
from lifxctl.ui.base import Prompter, Renderer


@dataclass
class SessionContext:
    client: DeviceClient
    prompter: Prompter
    renderer: Renderer
    defaults: FieldDefaults = field(default_factory=FieldDefaults)
