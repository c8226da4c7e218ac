"""Interactive LAN control for LIFX lights."""

__version__ = "0.1.0"
