"""Exceptions raised by the research workflow"""


class ResearchError(Exception):
    """Base class for research workflow errors"""


class ConfigurationError(ResearchError):
    """Required configuration is missing or invalid"""


class GenerationError(ResearchError):
    """The research plan could not be generated"""


class StepError(ResearchError):
    """A single research step failed"""


class SynthesisError(ResearchError):
    """The final report could not be synthesized"""


class CancellationError(ResearchError):
    """The run was cancelled at a check point"""


class InvalidTransitionError(ResearchError):
    """An action is not allowed in the current run state"""
