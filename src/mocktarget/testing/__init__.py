"""Test utilities for mocktarget applications.

    from mocktarget.testing import FixedRandom, FrozenClock, TestClient
"""

from mocktarget.testing.client import TestClient
from mocktarget.testing.fakes import FROZEN_EPOCH, FixedRandom, FrozenClock

__all__ = ["FROZEN_EPOCH", "FixedRandom", "FrozenClock", "TestClient"]
