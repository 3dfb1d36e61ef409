"""Configuration loading for covenant-monitor-api using platform_core TypedDict settings."""

from __future__ import annotations

from covenant_engine import ScenarioBaseline
from platform_core.config import CovenantMonitorSettings as Settings
from platform_core.config import load_covenant_monitor_settings


def settings_from_env() -> Settings:
    """Load covenant-monitor settings from the shared platform_core config."""
    return load_covenant_monitor_settings()


def scenario_baseline(settings: Settings) -> ScenarioBaseline:
    """Scenario constants taken from settings."""
    cfg = settings["scenario"]
    return ScenarioBaseline(
        baseline_control=cfg["baseline_control"],
        baseline_a=cfg["baseline_a"],
        coefficient_a=cfg["coefficient_a"],
        operator_a=cfg["operator_a"],
        threshold_a=cfg["threshold_a"],
        baseline_b=cfg["baseline_b"],
        coefficient_b=cfg["coefficient_b"],
        operator_b=cfg["operator_b"],
        threshold_b=cfg["threshold_b"],
        precision=cfg["precision"],
    )


__all__ = ["Settings", "scenario_baseline", "settings_from_env"]
