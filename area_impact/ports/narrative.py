"""
Narrative generation port interface.

The generative-text service is an external collaborator; it receives
the assembled report and returns a plain-text situation summary.
"""

from typing import Protocol
from area_impact.core.models import Report

class NarrativePort(Protocol):
    """서술 생성 포트 인터페이스"""

    async def narrate(self, report: Report) -> str:
        ...
