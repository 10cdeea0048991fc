from .io import resolve_resource
from .raganato import read_all_words
from .senseval import read_answer_key, read_lexical_sample, write_answer_key
from .store import load_assignments, save_assignments

__all__ = [
    "load_assignments",
    "read_all_words",
    "read_answer_key",
    "read_lexical_sample",
    "resolve_resource",
    "save_assignments",
    "write_answer_key",
]
