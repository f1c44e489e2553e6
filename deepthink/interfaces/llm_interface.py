"""Interface for LLM clients"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class LLMInterface(ABC):
    """Abstract base class for LLM clients"""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        schema: Optional[Any] = None,
        model: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> str:
        """Execute a single completion

        Args:
            prompt: Prompt text sent to the model
            schema: Structured-output schema; when given the model answers with JSON
            model: Model name overriding the client default
            thinking_budget: Token budget for model reasoning, if supported

        Returns:
            The generated text, or an empty string when the model produced none
        """
        pass
