"""Background execution of research runs for the UI"""

import asyncio
import logging
import threading
from typing import Optional

from ..interfaces.llm_interface import LLMInterface
from ..models.research_models import ResearchConfig, RunState
from ..utils.cancellation import CancellationToken
from .orchestrator import ResearchOrchestrator
from .plan_generator import PlanGenerator
from .report_synthesizer import ReportSynthesizer
from .run_store import Reset, RunStore
from .step_executor import StepExecutor

logger = logging.getLogger(__name__)


def create_orchestrator(
    llm_client: LLMInterface,
    config: ResearchConfig,
    store: Optional[RunStore] = None,
) -> ResearchOrchestrator:
    """Wire the model services into an orchestrator"""
    return ResearchOrchestrator(
        store=store or RunStore(),
        planner=PlanGenerator(llm_client, config),
        executor=StepExecutor(llm_client, config),
        synthesizer=ReportSynthesizer(llm_client, config),
        step_delay_seconds=config.step_delay_seconds,
    )


class ResearchRunner:
    """Runs one research task at a time on a worker thread"""

    def __init__(self, orchestrator: ResearchOrchestrator):
        self.orchestrator = orchestrator
        self._token: Optional[CancellationToken] = None
        self._run_id: Optional[str] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def store(self) -> RunStore:
        return self.orchestrator.store

    def snapshot(self) -> RunState:
        return self.store.state

    def start(self, topic: str) -> bool:
        """Start a run for *topic*; returns False for a blank topic"""
        if not topic.strip():
            return False
        run_id = self.orchestrator.start(topic)
        token = CancellationToken()
        self._run_id, self._token = run_id, token
        self._thread = threading.Thread(
            target=asyncio.run,
            args=(self.orchestrator.execute(run_id, topic, token),),
            name=f"research-{run_id[:8]}",
            daemon=True,
        )
        self._thread.start()
        return True

    def stop(self) -> None:
        """Cancel the active run; its in-flight request is left to finish and discarded"""
        if self._token is None:
            return
        self._token.cancel()
        self.orchestrator.cancel(self._run_id)
        self._token = None

    def reset(self) -> None:
        self.store.dispatch(Reset())

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread of the latest run"""
        if self._thread is not None:
            self._thread.join(timeout)
