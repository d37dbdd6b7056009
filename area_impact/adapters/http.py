"""
Shared JSON-over-HTTP client for external geographic services.

This module wraps an aiohttp session with a per-call timeout and maps
transport and decoding problems onto the source error taxonomy.
"""

import asyncio
from typing import Any, Optional

import aiohttp

from area_impact.common.retry import retry_with_backoff
from area_impact.core.errors import ParseFailure, SourceUnavailable
from area_impact.observability.logging_setup import get_logger

log = get_logger("area_impact.http")

DEFAULT_USER_AGENT = "area-impact/0.1"


class JsonHttpClient:
    """JSON 응답을 반환하는 외부 서비스 클라이언트 기반 클래스"""

    source = "http"

    def __init__(self,
                 *,
                 timeout: float = 30,
                 max_retries: int = 0,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        초기화합니다.

        Args:
            timeout: 호출당 전체 타임아웃 (초)
            max_retries: 전송 실패 시 재시도 횟수
            user_agent: User-Agent 헤더
            session: 외부에서 주입한 세션 (주입 시 닫지 않음)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def _request_json(self, method: str, url: str, **kwargs) -> Any:
        """
        요청을 수행하고 JSON 본문을 반환합니다.

        Args:
            method: HTTP 메서드
            url: 요청 URL
            **kwargs: 추가 요청 매개변수

        Returns:
            디코딩된 JSON

        Raises:
            SourceUnavailable: 네트워크 오류, 타임아웃, 200 이외의 상태
            ParseFailure: JSON이 아닌 응답
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")

        async def _request():
            try:
                async with self.session.request(
                    method, url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                    **kwargs
                ) as response:
                    if response.status != 200:
                        body = await response.text()
                        raise SourceUnavailable(
                            self.source, f"HTTP {response.status} from {url}: {body[:200]}"
                        )
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
                        raise ParseFailure(self.source, f"invalid JSON from {url}: {e}")
            except asyncio.TimeoutError:
                raise SourceUnavailable(self.source, f"timed out after {self.timeout}s: {url}")
            except aiohttp.ClientError as e:
                raise SourceUnavailable(self.source, f"{type(e).__name__}: {e}")

        return await retry_with_backoff(
            _request,
            max_retries=self.max_retries,
            retry_on=(SourceUnavailable,)
        )
