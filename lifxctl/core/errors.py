"""Domain-specific errors for lifxctl."""


class LifxctlError(Exception):
    """Base error for lifxctl."""


class DiscoveryError(LifxctlError):
    """Raised when device discovery fails or never becomes ready. Fatal for a session."""


class NoDevicesFound(LifxctlError):
    """Raised when a target is requested while the device catalog is empty."""


class UnknownWaveform(LifxctlError):
    """Raised when a waveform name has no matching waveform kind."""


class DeviceOperationFailed(LifxctlError):
    """Raised when a device operation times out, cannot reach the device, or is rejected."""


class InvalidField(LifxctlError):
    """Raised when a prompted value falls outside its allowed domain."""
