"""
Common 모듈 단위 테스트

이 모듈은 재시도 로직의 기능을 테스트합니다.
"""

import pytest
from unittest.mock import AsyncMock, patch

from area_impact.common.retry import backoff_delay, retry_with_backoff
from area_impact.core.errors import ParseFailure, SourceUnavailable


class TestBackoffDelay:
    """지수 백오프 지연 계산 테스트"""

    @pytest.mark.parametrize("attempt,expected", [(1, 0.5), (2, 1.0), (3, 2.0), (4, 4.0)])
    def test_exponential_growth(self, attempt, expected):
        """지터 없이 지수적으로 증가"""
        assert backoff_delay(attempt, 0.5, 10.0, jitter=False) == expected

    def test_capped_at_max_delay(self):
        """최대 지연 시간 제한"""
        assert backoff_delay(10, 0.5, 3.0, jitter=False) == 3.0

    def test_jitter_range(self):
        """지터는 50%~100% 범위"""
        for _ in range(50):
            delay = backoff_delay(3, 0.5, 10.0, jitter=True)
            assert 1.0 <= delay <= 2.0


class TestRetryWithBackoff:
    """재시도 로직 테스트"""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        """첫 시도 성공"""
        func = AsyncMock(return_value="ok")

        result = await retry_with_backoff(func)

        assert result == "ok"
        func.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self):
        """기본값은 재시도 없이 한 번만 시도"""
        func = AsyncMock(side_effect=SourceUnavailable("overpass", "HTTP 504"))

        with pytest.raises(SourceUnavailable):
            await retry_with_backoff(func)

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        """재시도 후 성공"""
        func = AsyncMock(side_effect=[SourceUnavailable("overpass", "HTTP 504"), "ok"])

        with patch("area_impact.common.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await retry_with_backoff(func, max_retries=2, jitter=False)

        assert result == "ok"
        assert func.await_count == 2
        sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_exhausted_retries_reraise(self):
        """재시도 소진 시 마지막 예외 전파"""
        func = AsyncMock(side_effect=SourceUnavailable("overpass", "HTTP 429"))

        with patch("area_impact.common.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(SourceUnavailable):
                await retry_with_backoff(func, max_retries=2)

        assert func.await_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_non_matching_exception_not_retried(self):
        """재시도 대상이 아닌 예외는 즉시 전파"""
        func = AsyncMock(side_effect=ParseFailure("overpass", "bad json"))

        with pytest.raises(ParseFailure):
            await retry_with_backoff(func, max_retries=3, retry_on=(SourceUnavailable,))

        func.assert_awaited_once()
