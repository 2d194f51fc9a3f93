"""
Blue/Green Pool Service

A small HTTP fixture for exercising blue/green failover behind a reverse
proxy:
- Pool/release identity on every response
- Liveness endpoint that is never affected by fault injection
- Operator-triggered chaos mode (simulated 500s or hung requests)
"""

import time

__version__ = "1.0.0"

# Uptime origin; the package is imported as the process starts serving
PROCESS_STARTED_MONOTONIC = time.monotonic()

from bluegreen_service.config import Settings, get_settings

__all__ = ["__version__", "PROCESS_STARTED_MONOTONIC", "Settings", "get_settings"]
