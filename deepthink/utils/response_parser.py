# deepthink/utils/response_parser.py
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ResponseParser:
    """Utility class for parsing LLM responses."""

    def extract_json(self, content: str) -> Any:
        """
        Extract and parse a JSON object from model output.

        Structured-output responses are plain JSON. When the model wraps the
        object in prose or a code fence, the text between the first '{' and
        the last '}' is parsed instead.
        """
        if not content or not content.strip():
            raise ValueError("Empty response from model")
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            pass

        start = content.find('{')
        end = content.rfind('}')
        if start == -1 or end == -1 or end < start:
            logger.debug("No JSON object found in response: %.200s", content)
            raise ValueError("No JSON object found in response")
        json_str = content[start:end + 1]
        try:
            return json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.debug("Invalid JSON extracted from response: %.200s", json_str)
            raise ValueError("Invalid JSON extracted from response") from e

    def extract_object(self, content: str) -> dict:
        """Like extract_json, but the top-level value must be a JSON object."""
        result = self.extract_json(content)
        if not isinstance(result, dict):
            raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
        return result
