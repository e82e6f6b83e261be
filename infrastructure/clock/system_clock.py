"""基于 asyncio 的系统时钟"""

import asyncio
import time
from datetime import datetime, timezone


class SystemClock:
    """系统时钟实现"""

    def monotonic(self) -> float:
        return time.monotonic()

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
