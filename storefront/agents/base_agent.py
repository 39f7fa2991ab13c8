"""BaseAgent interface for all agents."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..schemas.io_models import AgentResult, Recommendation


class BaseAgent(ABC):
    name: str = "base"

    @abstractmethod
    def handle(self, query: str, session: Dict[str, Any]) -> AgentResult:
        """Answer one user message."""
        ...

    def _ok(self, intent: str, text: str, recommendations: List[Recommendation] = None, **facts) -> AgentResult:
        return AgentResult(
            agent=self.name,
            intent=intent,
            text_response=text,
            recommendations=recommendations or [],
            facts=facts,
        )
