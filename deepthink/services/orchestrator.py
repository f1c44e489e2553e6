"""Research run orchestration"""

import asyncio
import logging
import uuid
from typing import Optional

from ..exceptions import CancellationError
from ..models.research_models import LogEntry, LogType, RunState, RunStatus
from ..utils.cancellation import CancellationToken
from ..utils.logging_utils import level_for
from .plan_generator import PlanGenerator
from .report_synthesizer import ReportSynthesizer
from .run_store import (
    LogAppended,
    PlanReady,
    ReportReady,
    RunCancelled,
    RunFailed,
    RunStore,
    StartRun,
    StepCompleted,
    StepFailed,
    StepStarted,
    SynthesisStarted,
)
from .step_executor import StepExecutor

logger = logging.getLogger(__name__)

ABORTED_MESSAGE = "Research process aborted by user."
FAILED_MESSAGE = "An unexpected error occurred."


class ResearchOrchestrator:
    """Runs plan generation, step execution and report synthesis in sequence"""

    def __init__(
        self,
        store: RunStore,
        planner: PlanGenerator,
        executor: StepExecutor,
        synthesizer: ReportSynthesizer,
        step_delay_seconds: float = 0.8,
    ):
        self.store = store
        self.planner = planner
        self.executor = executor
        self.synthesizer = synthesizer
        self.step_delay_seconds = step_delay_seconds

    def _commit(self, run_id: str, action, entry: LogEntry) -> RunState:
        """Dispatch *action*; mirror *entry* to the Python log only if the store kept it"""
        state = self.store.dispatch(action)
        if state.logs[-1:] == (entry,):
            logger.log(level_for(entry.type), "[%s] %s", run_id[:8], entry.message)
        return state

    def _log(self, run_id: str, message: str, log_type: LogType = LogType.INFO) -> None:
        entry = LogEntry.create(message, log_type)
        self._commit(run_id, LogAppended(run_id, entry), entry)

    def start(self, topic: str) -> str:
        """Move the store from Idle to Planning for *topic* and return the new run id"""
        run_id = uuid.uuid4().hex
        self.store.dispatch(StartRun(run_id, topic))
        return run_id

    def cancel(self, run_id: str) -> None:
        """Return a running run to Idle; a no-op once the run has ended"""
        entry = LogEntry.create(ABORTED_MESSAGE, LogType.WARNING)
        self._commit(run_id, RunCancelled(run_id, entry), entry)

    async def run(self, topic: str, token: Optional[CancellationToken] = None) -> RunState:
        """Start and execute a run for *topic*"""
        run_id = self.start(topic)
        return await self.execute(run_id, topic, token or CancellationToken())

    async def execute(self, run_id: str, topic: str, token: CancellationToken) -> RunState:
        """Execute a started run until it completes, fails or is cancelled"""
        try:
            self._log(run_id, f'Analyzing request: "{topic}"...')
            token.raise_if_cancelled()

            plan = await self.planner.generate_plan(topic)
            token.raise_if_cancelled()
            self.store.dispatch(PlanReady(run_id, plan))
            self._log(run_id, f"Plan generated with {len(plan.steps)} steps.", LogType.SUCCESS)

            for index, step in enumerate(plan.steps):
                token.raise_if_cancelled()
                self.store.dispatch(StepStarted(run_id, index))
                self._log(run_id, f"Executing Step {index + 1}: {step.query}")
                try:
                    result = await self.executor.execute_step(step, topic)
                    token.raise_if_cancelled()
                    self.store.dispatch(StepCompleted(run_id, index, result))
                    self._log(run_id, f"Step {index + 1} complete.", LogType.SUCCESS)
                except CancellationError:
                    raise
                except Exception:
                    logger.exception("Step %d of run %s failed", index + 1, run_id[:8])
                    self.store.dispatch(StepFailed(run_id, index))
                    self._log(run_id, f"Step {index + 1} failed.", LogType.ERROR)

                if self.step_delay_seconds > 0:
                    await asyncio.sleep(self.step_delay_seconds)

            token.raise_if_cancelled()
            state = self.store.dispatch(SynthesisStarted(run_id))
            if state.run_id != run_id or state.status is not RunStatus.SYNTHESIZING:
                # stopped, or superseded by a newer run
                raise CancellationError(f"Run {run_id[:8]} is no longer current")
            self._log(run_id, "Synthesizing final report...")
            report = await self.synthesizer.synthesize(state.plan)
            token.raise_if_cancelled()

            entry = LogEntry.create("Mission Complete.", LogType.SUCCESS)
            self._commit(run_id, ReportReady(run_id, report, entry), entry)
        except CancellationError:
            self.cancel(run_id)
        except Exception as e:
            logger.exception("Research run %s failed", run_id[:8])
            entry = LogEntry.create(FAILED_MESSAGE, LogType.ERROR)
            self._commit(run_id, RunFailed(run_id, entry, error=f"{type(e).__name__}: {e}"), entry)
        return self.store.state
