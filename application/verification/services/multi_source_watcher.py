"""多邮箱验证码监听服务 - 并行竞争多个来源"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from domain.common.clock import Clock
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.source_name import SourceName
from domain.mailbox.value_objects.sources_config import WatcherSourcesConfig
from domain.verification.exceptions import (
    CodeWaitTimeoutError,
    MailboxSessionError,
    NoSourceAvailableError,
)
from domain.verification.value_objects.source_outcome import OutcomeKind, SourceOutcome
from domain.verification.value_objects.verification_code import VerificationCode
from application.verification.services.mailbox_watcher import MailboxWatcher


WatcherFactory = Callable[[SourceName, MailboxCredentials], MailboxWatcher]


class MultiSourceWatcher:
    """
    多邮箱验证码监听服务

    聚合零到多个 MailboxWatcher，对外提供单一的等待验证码调用：
    - 连接阶段单个来源失败只记录日志并剔除，不影响其他来源
    - 每一轮并行检查所有已连接来源（使用 asyncio.gather）
    - 每个来源的结果收集为 SourceOutcome，单来源失败不会取消其他来源
    - 同一轮多个来源都找到验证码时，按来源顺序（primary 优先）选取
    - 本轮没有验证码则等待一个轮询间隔后开始下一轮，直到总超时
    - 每个来源的检查有硬性时限（单轮超时加 check_grace），
      超时未返回的来源被放弃并关闭，本轮记为无验证码
    - 会话失败或被放弃的来源在下一轮开始时重新连接一次；
      初次连接失败的来源在本次调用中不再重试
    """

    DEFAULT_ROUND_TIMEOUT: float = 10.0  # 单来源单轮超时（秒）
    DEFAULT_POLL_INTERVAL: float = 5.0  # 轮间隔（秒）
    DEFAULT_CHECK_GRACE: float = 2.0  # 单来源检查超出单轮超时的容忍时间（秒）

    def __init__(
        self,
        sources: WatcherSourcesConfig,
        watcher_factory: WatcherFactory,
        clock: Clock,
        round_timeout: float = DEFAULT_ROUND_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        check_grace: float = DEFAULT_CHECK_GRACE,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化多来源监听服务

        Args:
            sources: 来源配置，未配置的来源为 None
            watcher_factory: 按来源名称和凭据创建 MailboxWatcher 的工厂
            clock: 时钟
            round_timeout: 每轮每个来源的检查超时（秒），默认 10 秒
            poll_interval: 两轮之间的等待（秒），默认 5 秒
            check_grace: 单来源检查的硬性时限超出 round_timeout 的部分（秒），默认 2 秒
            logger: 可选的日志记录器
        """
        if round_timeout <= 0:
            raise ValueError("round_timeout must be positive")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if check_grace < 0:
            raise ValueError("check_grace must not be negative")

        self._sources = sources
        self._watcher_factory = watcher_factory
        self._clock = clock
        self._round_timeout = round_timeout
        self._poll_interval = poll_interval
        self._check_grace = check_grace
        self._logger = logger or logging.getLogger(__name__)

        self._active: Dict[SourceName, MailboxWatcher] = {}

    @property
    def configured_sources(self) -> List[SourceName]:
        """已配置的来源（按优先顺序）"""
        return [name for name, _ in self._sources.configured()]

    @property
    def active_sources(self) -> List[SourceName]:
        """已连接的来源（按优先顺序）"""
        return sorted(self._active, key=lambda name: name.priority)

    @property
    def round_timeout(self) -> float:
        """单来源单轮超时（秒）"""
        return self._round_timeout

    @property
    def poll_interval(self) -> float:
        """轮间隔（秒）"""
        return self._poll_interval

    async def connect(self) -> None:
        """
        逐个连接已配置的来源

        Raises:
            NoSourceAvailableError: 没有配置任何来源，或所有来源都连接失败
        """
        configured = self._sources.configured()
        if not configured:
            self._logger.error("No mailbox source configured")
            raise NoSourceAvailableError()

        failures: Dict[str, str] = {}

        for name, credentials in configured:
            if name in self._active:
                continue

            watcher = self._watcher_factory(name, credentials)
            try:
                await watcher.connect()
            except Exception as e:
                failures[name.value] = str(e)
                self._logger.error(f"Failed to connect {name.value} mailbox: {e}")
                await watcher.close()
                continue

            self._active[name] = watcher
            self._logger.info(f"Connected to {name.value} mailbox for monitoring")

        if not self._active:
            raise NoSourceAvailableError(failures)

        if failures:
            self._logger.warning(
                f"Continuing with {len(self._active)} of {len(configured)} mailbox source(s)"
            )

    async def wait_for_code(self, timeout: float) -> VerificationCode:
        """
        在所有已连接来源中等待验证码

        Args:
            timeout: 总超时（秒）

        Returns:
            第一个找到的验证码

        Raises:
            ValueError: timeout 不是正数
            NoSourceAvailableError: 没有已连接的来源
            CodeWaitTimeoutError: 总超时内没有任何来源找到验证码
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        if not self._active:
            raise NoSourceAvailableError()

        started = self._clock.monotonic()
        round_no = 0

        while True:
            remaining = timeout - (self._clock.monotonic() - started)
            if remaining <= 0:
                break

            round_no += 1
            outcomes = await self._run_round(min(self._round_timeout, remaining))

            winner = self._pick_winner(outcomes)
            if winner is not None:
                self._logger.info(
                    f"Verification code found by {winner.source.value} mailbox in round {round_no}"
                )
                return winner.code  # type: ignore[return-value]

            errors = sum(1 for o in outcomes if o.kind is OutcomeKind.ERROR)
            self._logger.debug(
                f"Round {round_no} complete: {len(outcomes)} source(s), "
                f"{len(outcomes) - errors} no match, {errors} error(s)"
            )

            remaining = timeout - (self._clock.monotonic() - started)
            if remaining <= 0:
                break
            await self._clock.sleep(min(self._poll_interval, remaining))

        self._logger.warning(f"No verification code from any mailbox after {timeout:g}s")
        raise CodeWaitTimeoutError(timeout)

    async def close(self) -> None:
        """关闭所有来源，尽力而为，不抛出异常"""
        failures: Dict[str, str] = {}

        for name in self.active_sources:
            watcher = self._active[name]
            try:
                await watcher.close()
            except Exception as e:
                failures[name.value] = str(e)

        self._active.clear()

        if failures:
            self._logger.debug(f"Errors while closing mailbox sources: {failures}")

    async def _run_round(self, sub_timeout: float) -> List[SourceOutcome]:
        """并行检查所有来源，收集全部结果后返回（按来源顺序）"""
        names = self.active_sources
        tasks = [
            self._check_source(name, self._active[name], sub_timeout)
            for name in names
        ]
        return list(await asyncio.gather(*tasks))

    async def _check_source(
        self, name: SourceName, watcher: MailboxWatcher, sub_timeout: float
    ) -> SourceOutcome:
        """
        检查单个来源

        整个检查（含重连）受硬性时限 sub_timeout + check_grace 约束。
        超过时限的检查被取消，来源被关闭，下一轮重新连接。

        Returns:
            SourceOutcome，任何异常都转换为 ERROR 结果
        """
        limit = sub_timeout + self._check_grace
        try:
            code = await asyncio.wait_for(self._check(name, watcher, sub_timeout), limit)
            return SourceOutcome.found(name, code)

        except CodeWaitTimeoutError:
            return SourceOutcome.no_match(name)

        except asyncio.TimeoutError:
            # 被放弃的 IMAP 命令可能仍占用连接，关闭后下一轮重新连接
            self._logger.warning(
                f"{name.value} mailbox did not respond within {limit:g}s, abandoning this round"
            )
            await watcher.close()
            return SourceOutcome.error(
                name,
                MailboxSessionError(stage="wait", message=f"no response within {limit:g}s"),
            )

        except Exception as e:
            self._logger.warning(f"Check failed for {name.value} mailbox: {e}")
            return SourceOutcome.error(name, e)

    async def _check(
        self, name: SourceName, watcher: MailboxWatcher, sub_timeout: float
    ) -> VerificationCode:
        if not watcher.is_connected:
            self._logger.info(f"Reconnecting {name.value} mailbox")
            await watcher.connect()
        return await watcher.wait_for_code(sub_timeout)

    @staticmethod
    def _pick_winner(outcomes: List[SourceOutcome]) -> Optional[SourceOutcome]:
        for outcome in sorted(outcomes, key=lambda o: o.source.priority):
            if outcome.has_code:
                return outcome
        return None
