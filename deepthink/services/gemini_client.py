"""Gemini client implementation using google-genai library"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from ..interfaces.llm_interface import LLMInterface
from ..models.research_models import ResearchConfig

logger = logging.getLogger(__name__)


class GeminiClient(LLMInterface):
    """Client for Gemini API using google-genai"""

    def __init__(self, api_key: str, config: ResearchConfig):
        # The google-genai client handles the base URL internally
        self.client = genai.Client(api_key=api_key)
        self.config = config

    def _generation_config(
        self,
        schema: Optional[Any],
        thinking_budget: Optional[int],
    ) -> types.GenerateContentConfig:
        options = {
            "temperature": self.config.temperature,
            # Explicitly disable automatic function calling, no tools are registered
            "automatic_function_calling": types.AutomaticFunctionCallingConfig(disable=True),
        }
        if schema is not None:
            options["response_mime_type"] = "application/json"
            options["response_schema"] = schema
        if thinking_budget is not None:
            options["thinking_config"] = types.ThinkingConfig(thinking_budget=thinking_budget)
        return types.GenerateContentConfig(**options)

    def generate(
        self,
        prompt: str,
        schema: Optional[Any] = None,
        model: Optional[str] = None,
        thinking_budget: Optional[int] = None,
    ) -> str:
        model_name = model or self.config.plan_model
        logger.debug("Gemini request model=%s structured=%s: %.100s", model_name, schema is not None, prompt)
        try:
            response = self.client.models.generate_content(
                model=model_name,
                contents=prompt,
                config=self._generation_config(schema, thinking_budget),
            )
        except Exception:
            logger.exception("Error in Gemini API call (model=%s)", model_name)
            raise

        generated_text = response.text or ""
        logger.debug("Gemini response (%d chars): %.100s", len(generated_text), generated_text)
        return generated_text
