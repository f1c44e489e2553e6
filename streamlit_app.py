#!/usr/bin/env python3
"""
Streamlit Application for the DeepThink Research Assistant.

Features:
- Research plan generation for a user topic using Gemini.
- Stepwise execution of the plan with live step status and system logs.
- Synthesis of the findings into a structured final report.
- Stop button for cooperative cancellation of a running task.
- Markdown export of the final report.
- API Key management via st.secrets or environment variables.

Runs execute on a background thread; the page polls the run store while a
run is active and renders the latest snapshot.
"""

import logging
import time
from datetime import datetime

import streamlit as st
from dotenv import load_dotenv

from deepthink.config.config_loader import ConfigLoader
from deepthink.exceptions import ConfigurationError
from deepthink.models.research_models import LogType, RunStatus, StepStatus
from deepthink.services.gemini_client import GeminiClient
from deepthink.services.research_runner import ResearchRunner, create_orchestrator
from deepthink.utils.logging_utils import setup_logging
from deepthink.utils.text_utils import create_markdown_document, safe_filename, truncate

load_dotenv()
logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.5

STATUS_BANNERS = {
    RunStatus.PLANNING: "Constructing research strategy...",
    RunStatus.EXECUTING: "Executing field operations...",
    RunStatus.SYNTHESIZING: "Compiling intelligence...",
}

STEP_ICONS = {
    StepStatus.PENDING: "⚪",
    StepStatus.IN_PROGRESS: "⏳",
    StepStatus.COMPLETED: "✅",
    StepStatus.FAILED: "❌",
}

LOG_COLORS = {
    LogType.INFO: "gray",
    LogType.SUCCESS: "green",
    LogType.WARNING: "orange",
    LogType.ERROR: "red",
}

# --- Streamlit UI Configuration ---
st.set_page_config(page_title="DeepThink", page_icon="🧠", layout="centered")


def _secret(section, key):
    """Reads a value from st.secrets, tolerating a missing secrets file."""
    try:
        return st.secrets.get(section, {}).get(key)
    except FileNotFoundError:
        return None


# --- Global Clients and Resources (Cached) ---

@st.cache_resource
def get_config():
    """Loads configuration and sets up logging once per server process."""
    config = ConfigLoader.load_config(api_key=_secret("api_keys", "GEMINI_API_KEY"))
    setup_logging(config.log_level, config.log_file)
    logger.info("Configuration loaded (plan model: %s).", config.plan_model)
    return config


@st.cache_resource
def get_gemini_client():
    """Initializes and returns the Gemini client."""
    config = get_config()
    client = GeminiClient(api_key=config.api_key, config=config)
    logger.info("GeminiClient initialized successfully.")
    return client


def get_runner() -> ResearchRunner:
    """Returns the research runner bound to this browser session."""
    if "runner" not in st.session_state:
        orchestrator = create_orchestrator(get_gemini_client(), get_config())
        st.session_state.runner = ResearchRunner(orchestrator)
    return st.session_state.runner


# --- Callbacks ---

def handle_start():
    topic = st.session_state.get("topic_input", "")
    if not get_runner().start(topic):
        st.toast("Enter a research topic first.")


def handle_stop():
    get_runner().stop()


def handle_reset():
    get_runner().reset()
    st.session_state.topic_input = ""


# --- Rendering ---

def render_header(status: RunStatus):
    st.title("🧠 DeepThink")
    label = "Online" if status is RunStatus.IDLE else status.value.title()
    dot = "🟢" if status is RunStatus.IDLE else "🟠"
    st.caption(f"{dot} {label}")


def render_plan(plan):
    left, right = st.columns([3, 1])
    left.markdown("**RESEARCH PATH**")
    right.caption(f"{len(plan.steps)} Steps")
    for step in plan.steps:
        with st.container(border=True):
            st.markdown(f"{STEP_ICONS[step.status]} **{step.query}**")
            st.caption(step.rationale)
            if step.result:
                st.markdown(f"*Latest Finding:* _{truncate(step.result)}_")


def render_logs(logs):
    with st.expander("System Logs", expanded=True):
        for entry in logs:
            stamp = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M:%S")
            st.markdown(f"`[{stamp}]` :{LOG_COLORS[entry.type]}[{entry.message}]")


def render_report(report):
    st.caption("RESEARCH REPORT")
    st.header(report.title or "Research Report")
    st.info(f"**Executive Summary**\n\n{report.summary}")
    for section in report.sections:
        st.subheader(section.title)
        st.write(section.content)
    st.divider()
    st.subheader("Conclusion")
    st.markdown(f"*{report.conclusion}*")

    col_reset, col_export = st.columns(2)
    col_reset.button("New Research", on_click=handle_reset, use_container_width=True)
    col_export.download_button(
        "Export Markdown",
        data=create_markdown_document(report),
        file_name=safe_filename(report.title, "report.md"),
        mime="text/markdown",
        type="primary",
        use_container_width=True,
    )


def render_input(status: RunStatus):
    # A form submits on Enter and commits the typed topic before the callback runs
    with st.form("research", border=False):
        col_input, col_action = st.columns([5, 1])
        col_input.text_input(
            "Research topic",
            key="topic_input",
            disabled=status is not RunStatus.IDLE,
            placeholder="Enter a research topic..." if status is RunStatus.IDLE else "Agent is working...",
            label_visibility="collapsed",
        )
        with col_action:
            if status.is_running:
                st.form_submit_button("⏹", on_click=handle_stop, help="Stop Execution", use_container_width=True)
            else:
                st.form_submit_button(
                    "➜",
                    on_click=handle_start,
                    disabled=status is not RunStatus.IDLE,
                    type="primary",
                    use_container_width=True,
                )


# --- Main Page ---

try:
    runner = get_runner()
except ConfigurationError as e:
    st.error(f"Missing required configuration: {e}. Set it in Streamlit secrets or environment variables.")
    st.stop()

state = runner.snapshot()

if state.status is RunStatus.COMPLETED and state.report is not None:
    render_report(state.report)
    st.stop()

render_header(state.status)

if state.status is RunStatus.IDLE:
    st.markdown("### ✨ Research Assistant")
    st.markdown(
        "I can plan, verify, and execute complex research tasks to generate comprehensive reports."
    )
elif state.status is RunStatus.ERROR:
    st.error("**Mission Failed**\n\nCheck network connection or API quota.")
    st.button("Reset System", on_click=handle_reset)
else:
    with st.container(border=True):
        st.markdown(f"**{STATUS_BANNERS.get(state.status, '')}**")
        remaining = "Few seconds" if state.status is RunStatus.SYNTHESIZING else "Variable"
        st.caption(f"Estimated time remaining: {remaining}")
    if state.plan is not None:
        render_plan(state.plan)
    render_logs(state.logs)

render_input(state.status)

if state.status.is_running:
    time.sleep(POLL_INTERVAL_SECONDS)
    st.rerun()
