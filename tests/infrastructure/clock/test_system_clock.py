"""SystemClock 测试"""

from datetime import timezone
from unittest.mock import AsyncMock, patch

import pytest

from infrastructure.clock.system_clock import SystemClock


class TestSystemClock:
    """系统时钟测试"""

    def test_monotonic_does_not_go_backwards(self):
        """测试单调时钟"""
        clock = SystemClock()

        first = clock.monotonic()
        second = clock.monotonic()

        assert second >= first

    def test_utcnow_is_timezone_aware(self):
        """测试返回带时区的 UTC 时间"""
        assert SystemClock().utcnow().tzinfo is timezone.utc

    @pytest.mark.asyncio
    async def test_sleep_uses_asyncio(self):
        """测试 sleep 委托给 asyncio.sleep"""
        with patch(
            "infrastructure.clock.system_clock.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            await SystemClock().sleep(2.5)

        mock_sleep.assert_awaited_once_with(2.5)
