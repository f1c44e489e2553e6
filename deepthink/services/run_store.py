"""Run state reducer and store

Every change to the run state goes through ``reduce``, a pure function of the
current ``RunState`` and an action. ``RunStore`` holds the current snapshot and
serialises dispatches so the UI thread can read while a run is writing.
"""

import threading
from dataclasses import dataclass, replace
from typing import Optional, Union

from ..exceptions import InvalidTransitionError
from ..models.research_models import (
    FinalReport,
    LogEntry,
    ResearchPlan,
    RunState,
    RunStatus,
    StepStatus,
)


@dataclass(frozen=True)
class StartRun:
    run_id: str
    topic: str


@dataclass(frozen=True)
class LogAppended:
    run_id: str
    entry: LogEntry


@dataclass(frozen=True)
class PlanReady:
    run_id: str
    plan: ResearchPlan


@dataclass(frozen=True)
class StepStarted:
    run_id: str
    index: int


@dataclass(frozen=True)
class StepCompleted:
    run_id: str
    index: int
    result: str


@dataclass(frozen=True)
class StepFailed:
    run_id: str
    index: int


@dataclass(frozen=True)
class SynthesisStarted:
    run_id: str


@dataclass(frozen=True)
class ReportReady:
    run_id: str
    report: FinalReport
    entry: Optional[LogEntry] = None


@dataclass(frozen=True)
class RunFailed:
    run_id: str
    entry: LogEntry
    error: Optional[str] = None


@dataclass(frozen=True)
class RunCancelled:
    run_id: str
    entry: LogEntry


@dataclass(frozen=True)
class Reset:
    pass


RunAction = Union[
    StartRun, LogAppended, PlanReady, StepStarted, StepCompleted, StepFailed,
    SynthesisStarted, ReportReady, RunFailed, RunCancelled, Reset,
]


def _require_status(state: RunState, action, *allowed: RunStatus) -> None:
    if state.status not in allowed:
        raise InvalidTransitionError(
            f"{type(action).__name__} not allowed while {state.status.value}"
        )


def _move_step(state: RunState, index: int, expected: StepStatus, status: StepStatus,
               result: Optional[str] = None) -> RunState:
    if state.plan is None or not 0 <= index < len(state.plan.steps):
        raise InvalidTransitionError(f"No step at index {index}")
    step = state.plan.steps[index]
    if step.status is not expected:
        raise InvalidTransitionError(
            f"Step {step.id} is {step.status.value}, expected {expected.value}"
        )
    plan = state.plan.replace_step(index, step.with_status(status, result))
    return replace(state, plan=plan)


def _is_stale(state: RunState, action) -> bool:
    # Late results of a cancelled or superseded run
    return action.run_id != state.run_id or not state.status.is_running


def reduce(state: RunState, action: RunAction) -> RunState:
    """Return the state after applying *action*

    Raises:
        InvalidTransitionError: If the action is not allowed in *state*
    """
    if isinstance(action, StartRun):
        if state.status.is_running:
            raise InvalidTransitionError("A research run is already in progress")
        _require_status(state, action, RunStatus.IDLE)
        if not action.topic.strip():
            raise InvalidTransitionError("Topic must not be empty")
        return RunState(status=RunStatus.PLANNING, topic=action.topic, run_id=action.run_id)

    if isinstance(action, Reset):
        if state.status.is_running:
            raise InvalidTransitionError("Cannot reset while a research run is in progress")
        return RunState()

    if _is_stale(state, action):
        return state

    if isinstance(action, LogAppended):
        return replace(state, logs=state.logs + (action.entry,))

    if isinstance(action, PlanReady):
        _require_status(state, action, RunStatus.PLANNING)
        return replace(state, status=RunStatus.EXECUTING, plan=action.plan)

    if isinstance(action, StepStarted):
        _require_status(state, action, RunStatus.EXECUTING)
        return _move_step(state, action.index, StepStatus.PENDING, StepStatus.IN_PROGRESS)

    if isinstance(action, StepCompleted):
        _require_status(state, action, RunStatus.EXECUTING)
        return _move_step(state, action.index, StepStatus.IN_PROGRESS, StepStatus.COMPLETED,
                          action.result)

    if isinstance(action, StepFailed):
        _require_status(state, action, RunStatus.EXECUTING)
        return _move_step(state, action.index, StepStatus.IN_PROGRESS, StepStatus.FAILED)

    if isinstance(action, SynthesisStarted):
        _require_status(state, action, RunStatus.EXECUTING)
        if any(not step.status.is_terminal for step in state.plan.steps):
            raise InvalidTransitionError("Cannot synthesize before every step has finished")
        return replace(state, status=RunStatus.SYNTHESIZING)

    if isinstance(action, ReportReady):
        _require_status(state, action, RunStatus.SYNTHESIZING)
        logs = state.logs + (action.entry,) if action.entry else state.logs
        return replace(state, status=RunStatus.COMPLETED, report=action.report, logs=logs)

    if isinstance(action, RunFailed):
        return replace(state, status=RunStatus.ERROR, error=action.error,
                       logs=state.logs + (action.entry,))

    if isinstance(action, RunCancelled):
        return replace(state, status=RunStatus.IDLE, logs=state.logs + (action.entry,))

    raise TypeError(f"Unknown action: {action!r}")


class RunStore:
    """Holds the current run state; the single entry point for mutations"""

    def __init__(self, state: Optional[RunState] = None):
        self._state = state or RunState()
        self._lock = threading.Lock()

    @property
    def state(self) -> RunState:
        return self._state

    def dispatch(self, action: RunAction) -> RunState:
        with self._lock:
            self._state = reduce(self._state, action)
            return self._state
