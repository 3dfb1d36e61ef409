"""Route modules for covenant-monitor-api."""

from __future__ import annotations

from . import covenants as covenants
from . import early_warnings as early_warnings
from . import health as health
from . import provisioning as provisioning

__all__: list[str] = []
