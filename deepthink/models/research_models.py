"""Data models for research runs"""

import time
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple


class RunStatus(Enum):
    """Lifecycle of a single research run"""
    IDLE = "IDLE"
    PLANNING = "PLANNING"
    EXECUTING = "EXECUTING"
    SYNTHESIZING = "SYNTHESIZING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"

    @property
    def is_running(self) -> bool:
        return self in (RunStatus.PLANNING, RunStatus.EXECUTING, RunStatus.SYNTHESIZING)


class StepStatus(Enum):
    """Lifecycle of one research step"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.COMPLETED, StepStatus.FAILED)


class LogType(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ResearchStep:
    """One investigative question of a plan"""
    id: str
    query: str
    rationale: str
    status: StepStatus = StepStatus.PENDING
    result: Optional[str] = None

    def with_status(self, status: StepStatus, result: Optional[str] = None) -> "ResearchStep":
        """Return a copy moved to *status*, keeping the previous result unless one is given"""
        return replace(self, status=status, result=result if result is not None else self.result)


@dataclass(frozen=True)
class ResearchPlan:
    """Ordered research steps for a topic"""
    topic: str
    steps: Tuple[ResearchStep, ...] = ()

    def replace_step(self, index: int, step: ResearchStep) -> "ResearchPlan":
        steps = list(self.steps)
        steps[index] = step
        return replace(self, steps=tuple(steps))

    def completed_steps(self) -> Tuple[ResearchStep, ...]:
        """Steps that finished successfully and produced findings, in plan order"""
        return tuple(
            step for step in self.steps
            if step.status is StepStatus.COMPLETED and step.result
        )


@dataclass(frozen=True)
class ReportSection:
    title: str
    content: str


@dataclass(frozen=True)
class FinalReport:
    """Synthesized research report"""
    title: str
    summary: str
    sections: Tuple[ReportSection, ...]
    conclusion: str


@dataclass(frozen=True)
class LogEntry:
    """Entry of the run log shown to the user"""
    id: str
    timestamp: float
    message: str
    type: LogType = LogType.INFO

    @classmethod
    def create(cls, message: str, type: LogType = LogType.INFO) -> "LogEntry":
        return cls(id=uuid.uuid4().hex, timestamp=time.time(), message=message, type=type)


@dataclass
class ResearchConfig:
    """Configuration for research runs"""
    api_key: Optional[str] = None
    plan_model: str = "gemini-2.5-flash"
    step_model: str = "gemini-2.5-flash"
    synthesis_model: str = "gemini-2.5-flash"
    step_thinking_budget: Optional[int] = 1024
    temperature: Optional[float] = None
    step_delay_seconds: float = 0.8  # UI pacing between steps, 0 disables
    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass(frozen=True)
class RunState:
    """Snapshot of everything the UI renders for the current run"""
    status: RunStatus = RunStatus.IDLE
    topic: str = ""
    plan: Optional[ResearchPlan] = None
    report: Optional[FinalReport] = None
    logs: Tuple[LogEntry, ...] = field(default_factory=tuple)
    run_id: Optional[str] = None
    error: Optional[str] = None
