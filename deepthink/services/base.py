"""Shared plumbing for services that call the model"""

import asyncio
import functools
import inspect
from typing import Any, Optional

from ..interfaces.llm_interface import LLMInterface
from ..models.research_models import ResearchConfig
from ..utils.response_parser import ResponseParser


class ModelService:
    """Base class for services issuing one model request per operation"""

    def __init__(self, llm_client: LLMInterface, config: ResearchConfig):
        self.llm = llm_client
        self.config = config
        self.parser = ResponseParser()

    async def _generate(
        self,
        prompt: str,
        schema: Optional[Any] = None,
        model: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> str:
        """Run the blocking client call off the event loop"""
        call = functools.partial(
            self.llm.generate,
            prompt,
            schema=schema,
            model=model,
            thinking_budget=thinking_budget,
        )
        if inspect.iscoroutinefunction(self.llm.generate):
            return await call()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, call)
