"""Scoring utilities for sense assignments."""

from .exact_match import ExactMatchConfig, ExactMatchResult, LemmaScore, score_exact_match

__all__ = ["ExactMatchConfig", "ExactMatchResult", "LemmaScore", "score_exact_match"]
