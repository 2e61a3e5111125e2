"""Public API surface for wb_common."""

from wb_common.errors import (
    ConfigurationError,
    DiscoveryError,
    InstallError,
    StatusProbeError,
    WBError,
    error_to_payload,
    wrap_error,
)
from wb_common.logging import configure_logging, quiet_stderr_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DiscoveryError",
    "InstallError",
    "StatusProbeError",
    "WBError",
    "error_to_payload",
    "quiet_stderr_logging",
    "wrap_error",
]
