"""Experiment drivers wiring readers, answer keys, mapper stages and reports together."""

from .semeval1_aw import run_semeval1_aw
from .senseval2_ls import run_senseval2_ls
from .wsd_eval import SystemRun, run_preset_evaluation

__all__ = ["SystemRun", "run_preset_evaluation", "run_semeval1_aw", "run_senseval2_ls"]
