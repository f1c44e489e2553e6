"""Final report synthesis"""

import logging

from google.genai import types

from ..exceptions import SynthesisError
from ..models.research_models import FinalReport, ReportSection, ResearchPlan
from .base import ModelService

logger = logging.getLogger(__name__)

CONTEXT_DELIMITER = "\n\n---\n\n"

REPORT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": types.Schema(type=types.Type.STRING),
        "summary": types.Schema(type=types.Type.STRING),
        "sections": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "title": types.Schema(type=types.Type.STRING),
                    "content": types.Schema(type=types.Type.STRING),
                },
            ),
        ),
        "conclusion": types.Schema(type=types.Type.STRING),
    },
)


def build_synthesis_context(plan: ResearchPlan) -> str:
    """Findings of the completed steps, in plan order"""
    return CONTEXT_DELIMITER.join(
        f"Q: {step.query}\nFindings: {step.result}"
        for step in plan.completed_steps()
    )


def _text(value) -> str:
    return value if isinstance(value, str) else ""


class ReportSynthesizer(ModelService):
    """Service compiling step findings into a structured report"""

    def _create_report_prompt(self, topic: str, context: str) -> str:
        return f"""You are a senior analyst. Write a comprehensive report on "{topic}" based strictly on the following research findings.

Research Findings:
{context}

Format the output as a JSON object with a title, executive summary, sections (title + content), and a conclusion.
"""

    def _parse_report(self, content: str) -> FinalReport:
        try:
            data = self.parser.extract_object(content)
        except ValueError as e:
            raise SynthesisError(f"Malformed report response: {e}") from e

        raw_sections = data.get("sections")
        sections = tuple(
            ReportSection(title=_text(s.get("title")), content=_text(s.get("content")))
            for s in (raw_sections if isinstance(raw_sections, list) else [])
            if isinstance(s, dict)
        )
        return FinalReport(
            title=_text(data.get("title")),
            summary=_text(data.get("summary")),
            sections=sections,
            conclusion=_text(data.get("conclusion")),
        )

    async def synthesize(self, plan: ResearchPlan) -> FinalReport:
        """Synthesize the report for a fully executed plan

        Raises:
            SynthesisError: If the model returns no text or an unusable report
        """
        context = build_synthesis_context(plan)
        logger.info(
            "Synthesizing report from %d of %d steps",
            len(plan.completed_steps()), len(plan.steps),
        )
        content = await self._generate(
            self._create_report_prompt(plan.topic, context),
            schema=REPORT_SCHEMA,
            model=self.config.synthesis_model,
        )
        if not content:
            raise SynthesisError("Failed to generate report")
        return self._parse_report(content)
