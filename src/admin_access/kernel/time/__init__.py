"""Kernel time – Clock port and implementations."""
from admin_access.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
