"""邮箱监听器状态"""

from enum import Enum


class WatcherState(str, Enum):
    """邮箱监听器状态

    Attributes:
        DISCONNECTED: 未连接 - 初始状态，或 close()/连接失败之后
        CONNECTING: 连接中
        CONNECTED: 已连接 - 可以开始等待验证码
        POLLING: 轮询中 - wait_for_code 正在执行
        FOUND: 已找到 - 上一次等待返回了验证码，连接仍然可用
        TIMED_OUT: 已超时 - 上一次等待超时，连接仍然可用
        FAILED: 失败 - 轮询中会话出错，连接已释放
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    POLLING = "polling"
    FOUND = "found"
    TIMED_OUT = "timed_out"
    FAILED = "failed"

    @property
    def has_connection(self) -> bool:
        """该状态下是否持有可用的会话"""
        return self in (
            WatcherState.CONNECTED,
            WatcherState.POLLING,
            WatcherState.FOUND,
            WatcherState.TIMED_OUT,
        )

    @property
    def can_wait(self) -> bool:
        """该状态下是否可以开始新的 wait_for_code"""
        return self.has_connection and self is not WatcherState.POLLING
