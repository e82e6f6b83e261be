"""检索验证码命令"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from domain.common.clock import Clock
from domain.verification.services.code_consumer import CodeConsumer
from domain.verification.value_objects.verification_code import VerificationCode


class CodeSource(Protocol):
    """MailboxWatcher 与 MultiSourceWatcher 共同的调用契约"""

    async def connect(self) -> None: ...

    async def wait_for_code(self, timeout: float) -> VerificationCode: ...

    async def close(self) -> None: ...


@dataclass
class RetrieveCodeCommand:
    """检索验证码命令

    Attributes:
        timeout: 等待验证邮件的总时长（秒）
    """

    timeout: float = 60.0


@dataclass
class RetrieveCodeResult:
    """命令执行结果

    Attributes:
        code: 检索到并已提交的验证码
        elapsed: 从开始连接到提交完成的耗时（秒）
    """

    code: VerificationCode
    elapsed: float


class RetrieveCodeHandler:
    """检索验证码 Handler

    串起完整的调用流程：
    1. 连接邮箱来源
    2. 等待验证码
    3. 把验证码交给 CodeConsumer（浏览器驱动）填入表单
    4. 无论成功与否都关闭邮箱来源

    任何错误在关闭来源后原样抛出，由调用方终止整个自动化流程。
    """

    def __init__(
        self,
        source: CodeSource,
        consumer: CodeConsumer,
        clock: Clock,
        logger: Optional[logging.Logger] = None,
    ):
        """初始化 Handler

        Args:
            source: 验证码来源（单邮箱或多邮箱监听器）
            consumer: 验证码消费者
            clock: 时钟
            logger: 日志记录器
        """
        self._source = source
        self._consumer = consumer
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

    async def handle(self, command: RetrieveCodeCommand) -> RetrieveCodeResult:
        """执行命令

        Args:
            command: 检索验证码命令

        Returns:
            RetrieveCodeResult

        Raises:
            NoSourceAvailableError: 没有可用的邮箱来源
            MailboxConnectionError: 单邮箱来源连接失败
            CodeWaitTimeoutError: 超时未收到验证码
            MailboxSessionError: 单邮箱来源会话中断
        """
        started = self._clock.monotonic()
        self._logger.info(f"Waiting up to {command.timeout:g}s for verification code")

        try:
            await self._source.connect()
            code = await self._source.wait_for_code(command.timeout)
            await self._consumer.submit_code(code)
        except Exception as e:
            self._logger.error(f"Verification code retrieval failed: {e}")
            raise
        finally:
            await self._source.close()

        elapsed = self._clock.monotonic() - started
        self._logger.info(f"Verification code submitted after {elapsed:.1f}s")
        return RetrieveCodeResult(code=code, elapsed=elapsed)
