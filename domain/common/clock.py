"""时钟接口"""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """
    时钟接口

    轮询循环通过该接口读取时间和等待，
    测试中替换为可手动推进的假时钟，避免真实的墙钟等待。
    """

    def monotonic(self) -> float:
        """单调时间（秒），用于计算超时"""
        ...

    def utcnow(self) -> datetime:
        """当前 UTC 时间，用于构造搜索时间窗口"""
        ...

    async def sleep(self, seconds: float) -> None:
        """挂起当前协程指定秒数"""
        ...
