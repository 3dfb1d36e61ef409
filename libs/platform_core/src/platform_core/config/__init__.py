from __future__ import annotations

from ._utils import ConfigError
from .covenant_monitor import (
    CovenantMonitorLoggingConfig,
    CovenantMonitorScenarioConfig,
    CovenantMonitorSettings,
    load_covenant_monitor_settings,
)

__all__ = [
    "ConfigError",
    "CovenantMonitorLoggingConfig",
    "CovenantMonitorScenarioConfig",
    "CovenantMonitorSettings",
    "load_covenant_monitor_settings",
]
