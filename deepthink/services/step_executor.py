"""Research step execution"""

import logging

from ..exceptions import StepError
from ..models.research_models import ResearchStep
from .base import ModelService

logger = logging.getLogger(__name__)

NO_INFORMATION = "No information found."


class StepExecutor(ModelService):
    """Service answering a single research step"""

    def _create_step_prompt(self, step: ResearchStep, topic: str) -> str:
        # Model knowledge only; no search tool is attached to the request.
        return f"""Context: Researching "{topic}".
Task: Investigate the following question: "{step.query}".
Rationale: {step.rationale}

Provide a detailed, factual summary of the answer to this specific question based on your knowledge.
Focus on concrete details, numbers, and verifiable facts. Limit to 300 words.
"""

    async def execute_step(self, step: ResearchStep, topic: str) -> str:
        """Return the findings for *step*; the step itself is left untouched

        Raises:
            StepError: If the model request fails
        """
        try:
            content = await self._generate(
                self._create_step_prompt(step, topic),
                model=self.config.step_model,
                thinking_budget=self.config.step_thinking_budget,
            )
        except Exception as e:
            raise StepError(f"Step {step.id} failed: {e}") from e

        if not content:
            logger.info("Empty findings for step %s", step.id)
            return NO_INFORMATION
        return content
