"""Pipeline assembly: stage protocol, answer-key stage and the staged runner."""

from .runner import Pipeline, collect_assignments, validate_chain
from .stages import AnswerKeyStage, Stage

__all__ = [
    "AnswerKeyStage",
    "Pipeline",
    "Stage",
    "collect_assignments",
    "validate_chain",
]
