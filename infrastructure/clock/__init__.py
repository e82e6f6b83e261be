"""时钟实现"""

from infrastructure.clock.system_clock import SystemClock

__all__ = ["SystemClock"]
