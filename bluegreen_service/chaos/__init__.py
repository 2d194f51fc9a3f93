"""
Chaos mode: operator-triggered simulated failure of this pool member.
"""

from bluegreen_service.chaos.state import ChaosMode, ChaosSnapshot, ChaosState

__all__ = ["ChaosMode", "ChaosSnapshot", "ChaosState"]
