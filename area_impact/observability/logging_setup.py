"""
Logging configuration for area impact analysis.

All output goes through loguru. Records emitted by libraries on the
standard logging module (uvicorn, aiohttp, asyncio) are forwarded into
the same sink so a request can be followed across layers.
"""

from __future__ import annotations
import logging
import sys
from loguru import logger

FORWARDED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "aiohttp", "asyncio")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """stdlib logging 레코드를 loguru로 전달"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _forward_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in FORWARDED_LOGGERS:
        forwarded = logging.getLogger(name)
        forwarded.handlers = [InterceptHandler()]
        forwarded.propagate = False


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """
    loguru 싱크를 초기화합니다.

    Args:
        log_level: 최소 로그 레벨
        json_output: True이면 한 줄당 JSON 레코드로 출력 (수집기용)
    """
    logger.remove()
    logger.configure(extra={"name": "area_impact", "request_id": "-"})
    if json_output:
        logger.add(sys.stdout, level=log_level.upper(), serialize=True, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            colorize=True,
            level=log_level.upper(),
            backtrace=False,
            diagnose=False,
        )
    _forward_stdlib_logging()


def get_logger(name: str = "area_impact", **ctx):
    """모듈 이름과 선택적 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)


def request_context(request_id: str):
    """요청 처리 동안 모든 로그에 request_id를 부여합니다."""
    return logger.contextualize(request_id=request_id)
