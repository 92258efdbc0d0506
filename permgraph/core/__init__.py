"""Core: config, lifespan, and exception handlers (application bootstrap).

Single place for settings and app wiring.
"""

from permgraph.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
