"""Configuration loader"""

import os
from typing import Optional

from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from ..models.research_models import ResearchConfig

DEFAULT_MODEL = "gemini-2.5-flash"


def _optional_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value not in (None, "") else None


class ConfigLoader:
    """Loader for application configuration"""

    @staticmethod
    def load_config(api_key: Optional[str] = None) -> ResearchConfig:
        """Load configuration from environment

        Args:
            api_key: Explicit Gemini API key, e.g. from Streamlit secrets.
                Falls back to GEMINI_API_KEY, then GOOGLE_API_KEY.

        Returns:
            ResearchConfig object

        Raises:
            ConfigurationError: If the API key is missing or a value is malformed
        """
        # Load environment variables
        load_dotenv()

        api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not found in environment variables")

        try:
            budget = os.getenv("STEP_THINKING_BUDGET", "1024")
            return ResearchConfig(
                api_key=api_key,
                plan_model=os.getenv("GEMINI_PLAN_MODEL", DEFAULT_MODEL),
                step_model=os.getenv("GEMINI_STEP_MODEL", DEFAULT_MODEL),
                synthesis_model=os.getenv("GEMINI_SYNTHESIS_MODEL", DEFAULT_MODEL),
                step_thinking_budget=int(budget) if budget else None,
                temperature=_optional_float(os.getenv("TEMPERATURE")),
                step_delay_seconds=float(os.getenv("STEP_DELAY_SECONDS", "0.8")),
                log_level=os.getenv("LOG_LEVEL", "INFO"),
                log_file=os.getenv("LOG_FILE") or None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e
