"""Shared fixtures: a scripted stand-in for the Gemini client"""

import json
import threading

import pytest

from deepthink.interfaces.llm_interface import LLMInterface
from deepthink.models.research_models import ResearchConfig
from deepthink.services.plan_generator import PLAN_SCHEMA
from deepthink.services.report_synthesizer import REPORT_SCHEMA
from deepthink.services.run_store import RunStore

PLAN_JSON = json.dumps({
    "steps": [
        {"query": "Q1", "rationale": "R1"},
        {"query": "Q2", "rationale": "R2"},
        {"query": "Q3", "rationale": "R3"},
    ]
})

REPORT_JSON = json.dumps({
    "title": "Solid-State Batteries",
    "summary": "A short overview.",
    "sections": [
        {"title": "Chemistry", "content": "Sulfide electrolytes."},
        {"title": "Market", "content": "Pilot lines in 2027."},
    ],
    "conclusion": "Promising but early.",
})


class ScriptedLLM(LLMInterface):
    """Answers plan, step and report requests from canned responses

    A response may be a string, an exception instance (raised), or a
    callable taking the prompt and returning either of those.
    """

    def __init__(self, plan=PLAN_JSON, steps=None, report=REPORT_JSON):
        self.plan = plan
        self.steps = steps
        self.report = report
        self.calls = []
        self._lock = threading.Lock()

    def _kind(self, schema):
        if schema is PLAN_SCHEMA:
            return "plan"
        if schema is REPORT_SCHEMA:
            return "report"
        return "step"

    def _resolve(self, response, prompt):
        if callable(response) and not isinstance(response, BaseException):
            response = response(prompt)
        if isinstance(response, BaseException):
            raise response
        return response

    def generate(self, prompt, schema=None, model=None, thinking_budget=None):
        kind = self._kind(schema)
        with self._lock:
            self.calls.append({
                "kind": kind,
                "prompt": prompt,
                "model": model,
                "thinking_budget": thinking_budget,
            })
            step_index = sum(1 for c in self.calls if c["kind"] == "step") - 1
        if kind == "plan":
            return self._resolve(self.plan, prompt)
        if kind == "report":
            return self._resolve(self.report, prompt)
        if self.steps is None:
            return f"Findings {step_index + 1}"
        return self._resolve(self.steps[step_index], prompt)

    def prompts(self, kind):
        return [c["prompt"] for c in self.calls if c["kind"] == kind]


@pytest.fixture
def config():
    return ResearchConfig(api_key="test-key", step_delay_seconds=0)


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def store():
    return RunStore()
