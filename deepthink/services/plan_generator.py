"""Research plan generation"""

import logging
import time
from typing import List

from google.genai import types

from ..exceptions import GenerationError
from ..models.research_models import ResearchPlan, ResearchStep, StepStatus
from .base import ModelService

logger = logging.getLogger(__name__)

PLAN_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "steps": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "query": types.Schema(
                        type=types.Type.STRING,
                        description="The specific question to investigate",
                    ),
                    "rationale": types.Schema(
                        type=types.Type.STRING,
                        description="Why this step is important",
                    ),
                },
                required=["query", "rationale"],
            ),
        ),
    },
    required=["steps"],
)


class PlanGenerator(ModelService):
    """Service turning a topic into an ordered list of research steps"""

    def _create_plan_prompt(self, topic: str) -> str:
        return f"""You are an expert research lead. Create a comprehensive research plan for the topic: "{topic}".
Break this down into 3-5 distinct, investigative steps (sub-questions) that need to be answered to form a complete report.
For each step, provide a search query and a brief rationale.
"""

    def _parse_steps(self, content: str) -> List[ResearchStep]:
        try:
            data = self.parser.extract_object(content)
        except ValueError as e:
            raise GenerationError(f"Malformed plan response: {e}") from e

        raw_steps = data.get("steps")
        if not isinstance(raw_steps, list):
            raise GenerationError("Plan response has no 'steps' list")

        created = int(time.time() * 1000)
        steps = []
        for index, raw in enumerate(raw_steps):
            if not isinstance(raw, dict) or not isinstance(raw.get("query"), str):
                raise GenerationError(f"Plan step {index + 1} has no query")
            rationale = raw.get("rationale")
            steps.append(ResearchStep(
                id=f"step-{index}-{created}",
                query=raw["query"],
                rationale=rationale if isinstance(rationale, str) else "",
                status=StepStatus.PENDING,
            ))
        return steps

    async def generate_plan(self, topic: str) -> ResearchPlan:
        """Generate a research plan for *topic*

        Raises:
            GenerationError: If the model returns no text or an unusable plan
        """
        content = await self._generate(
            self._create_plan_prompt(topic),
            schema=PLAN_SCHEMA,
            model=self.config.plan_model,
        )
        if not content:
            raise GenerationError("Failed to generate plan")

        steps = self._parse_steps(content)
        logger.info("Generated plan with %d steps for %r", len(steps), topic)
        return ResearchPlan(topic=topic, steps=tuple(steps))
