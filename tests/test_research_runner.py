import threading

from deepthink.models.research_models import RunState, RunStatus, StepStatus
from deepthink.services.orchestrator import ABORTED_MESSAGE
from deepthink.services.research_runner import ResearchRunner, create_orchestrator

from conftest import ScriptedLLM


def make_runner(llm, config):
    return ResearchRunner(create_orchestrator(llm, config))


def test_blank_topic_is_ignored(config, llm):
    runner = make_runner(llm, config)
    assert runner.start("   ") is False
    assert runner.snapshot() == RunState()
    assert llm.calls == []


def test_run_completes_in_background(config, llm):
    runner = make_runner(llm, config)
    assert runner.start("batteries") is True
    runner.join(timeout=10)

    state = runner.snapshot()
    assert state.status is RunStatus.COMPLETED
    assert state.report is not None


def test_stop_returns_to_idle_and_issues_no_further_requests(config):
    step_started = threading.Event()
    release = threading.Event()

    def blocking_step(prompt):
        step_started.set()
        release.wait(timeout=10)
        return "F1"

    llm = ScriptedLLM(steps=[blocking_step, "F2", "F3"])
    runner = make_runner(llm, config)
    runner.start("batteries")
    assert step_started.wait(timeout=10)

    runner.stop()
    assert runner.snapshot().status is RunStatus.IDLE

    release.set()
    runner.join(timeout=10)

    state = runner.snapshot()
    assert state.status is RunStatus.IDLE
    assert len(llm.prompts("step")) == 1
    assert state.plan.steps[0].status is StepStatus.IN_PROGRESS
    assert [e.message for e in state.logs].count(ABORTED_MESSAGE) == 1


def test_stop_without_run_is_noop(config, llm):
    runner = make_runner(llm, config)
    runner.stop()
    assert runner.snapshot() == RunState()


def test_reset_after_completion(config, llm):
    runner = make_runner(llm, config)
    runner.start("batteries")
    runner.join(timeout=10)

    runner.reset()
    assert runner.snapshot() == RunState()
    assert runner.start("solar") is True
    runner.join(timeout=10)
    assert runner.snapshot().topic == "solar"


def test_reset_after_error(config):
    llm = ScriptedLLM(plan="garbage")
    runner = make_runner(llm, config)
    runner.start("batteries")
    runner.join(timeout=10)
    assert runner.snapshot().status is RunStatus.ERROR

    runner.reset()
    state = runner.snapshot()
    assert (state.topic, state.plan, state.report, state.logs) == ("", None, None, ())
