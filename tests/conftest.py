"""
共享测试夹具

提供假时钟、内存邮箱客户端和测试邮件构造函数，
让所有等待逻辑在测试中确定地、无真实等待地运行。
"""

import asyncio
import email.message
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from domain.mail.services.mailbox_client import MailboxClient
from domain.mail.value_objects.candidate_message import CandidateMessage
from domain.mail.value_objects.search_criteria import SearchCriteria
from domain.verification.exceptions import MailboxConnectionError, MailboxSessionError


MICROSOFT_SENDER = "account@accountprotection.microsoft.com"


class FakeClock:
    """可手动推进的时钟，sleep 立即返回并推进时间"""

    def __init__(self, start: Optional[datetime] = None):
        self._now = 0.0
        self._wall_start = start or datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self._now

    def utcnow(self) -> datetime:
        return self._wall_start + timedelta(seconds=self._now)

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        wake_at = self._now + seconds
        # 让出控制权，使并发的 sleep 共享同一段时间而不是累加
        await asyncio.sleep(0)
        self._now = max(self._now, wake_at)

    def advance(self, seconds: float) -> None:
        self._now += seconds


class FakeMailboxClient(MailboxClient):
    """内存邮箱客户端

    邮件通过 deliver() 加入，可指定在某个时钟时刻之后才可见。
    """

    def __init__(
        self,
        clock: FakeClock,
        username: str = "user@example.com",
        host: str = "imap.example.com",
        port: int = 993,
        connect_error: Optional[Exception] = None,
    ):
        self._clock = clock
        self._username = username
        self._host = host
        self._port = port
        self.connect_error = connect_error
        self.search_error: Optional[Exception] = None
        self.fetch_error: Optional[Exception] = None
        self._pending_search_errors: List[Exception] = []
        self.hang_search = False

        self._messages: Dict[int, tuple] = {}
        self.connected = False
        self.connect_calls = 0
        self.close_calls = 0
        self.search_calls = 0
        self.fetched_uids: List[int] = []
        self.criteria_seen: List[SearchCriteria] = []

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def label(self) -> str:
        return self._username

    def deliver(self, uid: int, raw: bytes, at: float = 0.0) -> None:
        self._messages[uid] = (at, raw)

    def fail_next_search(self, error: Exception) -> None:
        """下一次 search 抛出 error，之后恢复正常"""
        self._pending_search_errors.append(error)

    async def connect(self) -> None:
        self.connect_calls += 1
        await asyncio.sleep(0)
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    async def search(self, criteria: SearchCriteria) -> List[int]:
        self.search_calls += 1
        self.criteria_seen.append(criteria)
        await asyncio.sleep(0)
        if not self.connected:
            raise MailboxSessionError(stage="search", message="not connected")
        if self.hang_search:
            # 模拟服务器不响应，只能被取消
            await asyncio.Event().wait()
        if self._pending_search_errors:
            raise self._pending_search_errors.pop(0)
        if self.search_error is not None:
            raise self.search_error
        now = self._clock.monotonic()
        return [uid for uid, (at, _) in self._messages.items() if at <= now]

    async def fetch(self, uid: int) -> CandidateMessage:
        self.fetched_uids.append(uid)
        await asyncio.sleep(0)
        if self.fetch_error is not None:
            raise self.fetch_error
        return CandidateMessage(uid=uid, raw_source=self._messages[uid][1])

    async def close(self) -> None:
        self.close_calls += 1
        self.connected = False


def make_raw_email(
    body: str,
    sender: str = MICROSOFT_SENDER,
    subject: str = "Microsoft account security code",
    html: bool = False,
) -> bytes:
    """构造测试用原始邮件"""
    msg = email.message.EmailMessage()
    msg["From"] = sender
    msg["To"] = "recovery@example.com"
    msg["Subject"] = subject
    msg["Date"] = "Sat, 17 Oct 2026 12:00:00 +0000"
    if html:
        msg.set_content(body, subtype="html")
    else:
        msg.set_content(body)
    return msg.as_bytes()


@pytest.fixture
def fake_clock():
    """创建假时钟"""
    return FakeClock()


@pytest.fixture
def make_client(fake_clock):
    """工厂夹具：创建绑定假时钟的内存邮箱客户端"""

    def _make_client(**kwargs) -> FakeMailboxClient:
        return FakeMailboxClient(fake_clock, **kwargs)

    return _make_client


@pytest.fixture
def unreachable_error():
    """模拟网络不可达的连接错误"""
    return MailboxConnectionError(host="imap.example.com", port=993, message="Connection refused")


@pytest.fixture
def raw_email():
    """返回测试邮件构造函数"""
    return make_raw_email
