"""单邮箱验证码监听服务"""

import logging
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar

from domain.common.clock import Clock
from domain.mail.services.mailbox_client import MailboxClient
from domain.mail.value_objects.search_criteria import SearchCriteria
from domain.verification.exceptions import (
    CodeWaitTimeoutError,
    MailboxConnectionError,
    MailboxNotConnectedError,
    MailboxSessionError,
)
from domain.verification.services.code_extractor import VerificationCodeExtractor
from domain.verification.value_objects.verification_code import VerificationCode
from domain.verification.value_objects.watcher_state import WatcherState

T = TypeVar("T")


class MailboxWatcher:
    """
    单邮箱验证码监听服务

    独占一个 MailboxClient 会话，按固定间隔轮询指定发件人的未读邮件，
    从最新的邮件开始提取验证码：
    - 找到验证码立即返回，不再等待下一个轮询间隔
    - 超时从第一次轮询开始计算，不随每次轮询重置
    - 轮询中会话出错立即失败，不在同一次调用内重试
    - 等待期间通过注入的时钟挂起，不阻塞事件循环
    """

    DEFAULT_SENDER = "account@accountprotection.microsoft.com"
    DEFAULT_POLL_INTERVAL: float = 5.0  # 秒
    DEFAULT_SEARCH_WINDOW = timedelta(hours=24)

    def __init__(
        self,
        client: MailboxClient,
        text_converter: Callable[[bytes], str],
        clock: Clock,
        extractor: Optional[VerificationCodeExtractor] = None,
        sender_address: str = DEFAULT_SENDER,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        search_window: timedelta = DEFAULT_SEARCH_WINDOW,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化监听服务

        Args:
            client: 邮箱客户端（由本监听器独占）
            text_converter: 原始邮件字节转纯文本的函数
            clock: 时钟
            extractor: 验证码提取器，默认使用规则提取器
            sender_address: 验证邮件的发件人地址
            poll_interval: 轮询间隔（秒），默认 5 秒
            search_window: 搜索时间窗口，默认 24 小时
            logger: 可选的日志记录器
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        self._client = client
        self._text_converter = text_converter
        self._clock = clock
        self._extractor = extractor or VerificationCodeExtractor()
        self._sender_address = sender_address
        self._poll_interval = poll_interval
        self._search_window = search_window
        self._logger = logger or logging.getLogger(__name__)

        self._state = WatcherState.DISCONNECTED
        self._criteria: Optional[SearchCriteria] = None

    @property
    def state(self) -> WatcherState:
        """当前状态"""
        return self._state

    @property
    def is_connected(self) -> bool:
        """是否持有可用的会话"""
        return self._state.has_connection

    @property
    def label(self) -> str:
        """日志中使用的邮箱描述"""
        return self._client.label

    @property
    def poll_interval(self) -> float:
        """轮询间隔（秒）"""
        return self._poll_interval

    @property
    def criteria(self) -> Optional[SearchCriteria]:
        """当前使用的搜索条件"""
        return self._criteria

    async def connect(self) -> None:
        """
        建立邮箱会话

        Raises:
            MailboxConnectionError: 连接或认证失败，状态回到 DISCONNECTED
        """
        if self.is_connected:
            self._logger.debug(f"[{self.label}] Already connected")
            return

        self._state = WatcherState.CONNECTING
        try:
            await self._client.connect()
        except Exception as e:
            self._state = WatcherState.DISCONNECTED
            await self._release()
            if isinstance(e, MailboxConnectionError):
                raise
            raise MailboxConnectionError(
                host=self._client.host, port=self._client.port, message=str(e)
            ) from e

        self._criteria = self._build_criteria()
        self._state = WatcherState.CONNECTED
        self._logger.info(f"[{self.label}] Connected, watching for mail from {self._sender_address}")

    async def wait_for_code(self, timeout: float) -> VerificationCode:
        """
        等待验证码

        Args:
            timeout: 最长等待时间（秒），从第一次轮询开始计算

        Returns:
            最新匹配邮件中的验证码

        Raises:
            ValueError: timeout 不是正数
            MailboxNotConnectedError: 未连接
            CodeWaitTimeoutError: 超时未找到验证码
            MailboxSessionError: 轮询中会话出错（会话已释放）
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        if not self._state.can_wait:
            raise MailboxNotConnectedError(self.label, self._state.value)

        self._state = WatcherState.POLLING
        criteria = self._criteria = self._build_criteria()
        started = self._clock.monotonic()
        polls = 0

        try:
            while True:
                polls += 1
                code = await self._poll_once(criteria)
                if code is not None:
                    self._state = WatcherState.FOUND
                    self._logger.info(
                        f"[{self.label}] Found verification code after {polls} poll(s)"
                    )
                    return code

                remaining = timeout - (self._clock.monotonic() - started)
                if remaining <= 0:
                    self._state = WatcherState.TIMED_OUT
                    self._logger.debug(
                        f"[{self.label}] No verification code after {polls} poll(s)"
                    )
                    raise CodeWaitTimeoutError(timeout, source=self.label)

                await self._clock.sleep(min(self._poll_interval, remaining))

        except MailboxSessionError as e:
            self._state = WatcherState.FAILED
            self._logger.error(f"[{self.label}] {e}")
            await self._release()
            raise
        finally:
            # 被外部取消时恢复为可再次等待的状态
            if self._state is WatcherState.POLLING:
                self._state = WatcherState.CONNECTED

    async def close(self) -> None:
        """释放会话，可重复调用，不抛出异常"""
        if self._state is WatcherState.DISCONNECTED:
            return
        await self._release()
        self._state = WatcherState.DISCONNECTED
        self._logger.debug(f"[{self.label}] Closed")

    async def _poll_once(self, criteria: SearchCriteria) -> Optional[VerificationCode]:
        """执行一次搜索，按最新优先检查每封匹配邮件"""
        uids = await self._call("search", self._client.search, criteria)
        if not uids:
            return None

        self._logger.debug(f"[{self.label}] {len(uids)} matching message(s)")

        for uid in sorted(uids, reverse=True):
            message = await self._call("fetch", self._client.fetch, uid)
            text = self._text_converter(message.raw_source)
            code = self._extractor.extract(text)
            if code is not None:
                return code

        return None

    async def _call(self, stage: str, func: Callable[..., Awaitable[T]], *args) -> T:
        """执行一次网络调用，把非领域异常包装为 MailboxSessionError"""
        try:
            return await func(*args)
        except MailboxSessionError:
            raise
        except Exception as e:
            raise MailboxSessionError(stage=stage, message=str(e)) from e

    def _build_criteria(self) -> SearchCriteria:
        return SearchCriteria.anchored_at(
            now=self._clock.utcnow(),
            sender_address=self._sender_address,
            window=self._search_window,
        )

    async def _release(self) -> None:
        try:
            await self._client.close()
        except Exception as e:
            self._logger.debug(f"[{self.label}] Error during close: {e}")
