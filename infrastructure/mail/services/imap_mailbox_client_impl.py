"""IMAP 邮箱客户端实现"""

import asyncio
import imaplib
import logging
import ssl
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, List, Optional, TypeVar

from domain.mail.services.mailbox_client import MailboxClient
from domain.mail.value_objects.candidate_message import CandidateMessage
from domain.mail.value_objects.search_criteria import SearchCriteria
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.verification.exceptions import (
    MailboxAuthenticationError,
    MailboxConnectionError,
    MailboxSessionError,
)

T = TypeVar("T")


class ImapMailboxClient(MailboxClient):
    """
    IMAP 邮箱客户端实现

    使用 Python 标准库 imaplib，支持：
    - 隐式 TLS（IMAPS，端口 993）或 STARTTLS 升级
    - 只读方式打开收件箱（EXAMINE），不会改变邮件的已读状态
    - 使用 BODY.PEEK[] 拉取原始邮件
    - 所有阻塞调用在单线程执行器中运行，避免阻塞事件循环
    """

    DEFAULT_TIMEOUT = 30  # 秒
    MAILBOX = "INBOX"

    def __init__(
        self,
        credentials: MailboxCredentials,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化 IMAP 客户端

        Args:
            credentials: 邮箱凭据
            timeout: socket 超时（秒），默认 30 秒
            logger: 可选的日志记录器
        """
        self._credentials = credentials
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

        self._imap: Optional[imaplib.IMAP4] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._in_flight: Optional[Future] = None

    @property
    def host(self) -> str:
        return self._credentials.host

    @property
    def port(self) -> int:
        return self._credentials.port

    @property
    def label(self) -> str:
        return self._credentials.username

    @property
    def is_connected(self) -> bool:
        return self._imap is not None

    async def connect(self) -> None:
        """
        建立 IMAP 会话并只读选择收件箱

        Raises:
            MailboxConnectionError: 连接、TLS 或选择收件箱失败
            MailboxAuthenticationError: 登录失败
        """
        if self._imap is not None:
            return
        self._imap = await self._run(self._connect)

    async def search(self, criteria: SearchCriteria) -> List[int]:
        imap = self._require_connection("search")
        args = criteria.to_imap_args()

        try:
            status, data = await self._run(imap.uid, "SEARCH", None, *args)
        except (imaplib.IMAP4.error, OSError) as e:
            raise MailboxSessionError(stage="search", message=str(e)) from e

        if status != "OK":
            raise MailboxSessionError(stage="search", message=f"server replied {status}")

        if not data or not data[0]:
            return []
        return [int(x) for x in data[0].split()]

    async def fetch(self, uid: int) -> CandidateMessage:
        imap = self._require_connection("fetch")

        try:
            status, data = await self._run(imap.uid, "FETCH", str(uid), "(BODY.PEEK[])")
        except (imaplib.IMAP4.error, OSError) as e:
            raise MailboxSessionError(stage="fetch", message=str(e)) from e

        if status != "OK":
            raise MailboxSessionError(stage="fetch", message=f"server replied {status} for UID {uid}")

        for part in data or []:
            if isinstance(part, tuple) and len(part) > 1 and isinstance(part[1], bytes):
                return CandidateMessage(uid=uid, raw_source=part[1])

        # 邮件在搜索与拉取之间被删除时服务器返回空结果
        self._logger.debug(f"[{self.label}] UID {uid} returned no body")
        return CandidateMessage(uid=uid, raw_source=b"")

    async def close(self) -> None:
        """
        关闭连接

        没有命令在执行时在执行器中正常 LOGOUT；
        有命令仍阻塞在 socket 上时直接关闭 socket 使其失败，不排在它后面等待。
        """
        imap, self._imap = self._imap, None
        executor, self._executor = self._executor, None
        in_flight, self._in_flight = self._in_flight, None

        if imap is not None:
            if in_flight is not None and not in_flight.done():
                self._logger.debug(f"[{self.label}] Command still running, aborting connection")
                self._abort(imap)
            else:
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(executor, partial(self._disconnect, imap))

        if executor is not None:
            executor.shutdown(wait=False)

    def _connect(self) -> imaplib.IMAP4:
        """
        建立连接、登录并只读选择收件箱（在执行器线程中运行）

        Returns:
            IMAP 连接对象
        """
        host = self._credentials.host
        port = self._credentials.port
        context = ssl.create_default_context()

        try:
            self._logger.debug(f"Connecting to {host}:{port}")
            if self._credentials.use_tls:
                imap = imaplib.IMAP4_SSL(
                    host=host,
                    port=port,
                    ssl_context=context,
                    timeout=self._timeout,
                )
            else:
                imap = imaplib.IMAP4(host=host, port=port, timeout=self._timeout)
                imap.starttls(ssl_context=context)
        except Exception as e:
            raise MailboxConnectionError(host=host, port=port, message=str(e)) from e

        try:
            self._logger.debug(f"Authenticating as {self._credentials.username}")
            imap.login(
                self._credentials.username,
                self._credentials.secret.get_secret_value(),
            )
        except imaplib.IMAP4.error as e:
            self._disconnect(imap)
            raise MailboxAuthenticationError(
                host=host,
                port=port,
                username=self._credentials.username,
                message=str(e),
            ) from e
        except Exception as e:
            self._disconnect(imap)
            raise MailboxConnectionError(host=host, port=port, message=str(e)) from e

        try:
            status, _ = imap.select(self.MAILBOX, readonly=True)
        except Exception as e:
            self._disconnect(imap)
            raise MailboxConnectionError(host=host, port=port, message=str(e)) from e

        if status != "OK":
            self._disconnect(imap)
            raise MailboxConnectionError(
                host=host, port=port, message=f"Cannot select {self.MAILBOX}"
            )

        self._logger.info(f"Successfully connected to {host}:{port}")
        return imap

    def _disconnect(self, imap: imaplib.IMAP4) -> None:
        """
        断开 IMAP 连接

        Args:
            imap: IMAP 连接对象
        """
        try:
            # close() 只能在 SELECTED 状态下调用
            if imap.state == "SELECTED":
                imap.close()
        except Exception as e:
            self._logger.debug(f"Error during close: {e}")

        try:
            imap.logout()
        except Exception as e:
            self._logger.debug(f"Error during logout: {e}")

    def _abort(self, imap: imaplib.IMAP4) -> None:
        """直接关闭 socket，阻塞中的读写随之失败"""
        try:
            imap.shutdown()
        except Exception as e:
            self._logger.debug(f"Error during shutdown: {e}")

    def _require_connection(self, stage: str) -> imaplib.IMAP4:
        if self._imap is None:
            raise MailboxSessionError(stage=stage, message="not connected")
        return self._imap

    async def _run(self, func: Callable[..., T], *args) -> T:
        """在执行器线程中运行阻塞调用"""
        if self._executor is None:
            # 单线程保证同一连接上的命令串行执行
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="imap-",
            )
        # 记录线程中的 Future：调用方被取消后它仍反映命令是否还在执行
        future = self._executor.submit(func, *args)
        self._in_flight = future
        return await asyncio.wrap_future(future)
