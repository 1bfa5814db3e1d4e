"""GuessTree: a self-growing yes/no decision tree persisted to a flat file."""

from .document import (
    Document,
    initialize,
    load,
    load_or_init,
    record_new_distinction,
    resolve,
    save,
    text_of,
    walk,
)
from .exceptions import FormatError, GuessTreeError, PreconditionViolation, StorageError
from .node import Answer, Kind, Node, Question
from .pool import StringPool, TextHandle
from .tree import DecisionTree

__all__ = [
    "Answer",
    "DecisionTree",
    "Document",
    "FormatError",
    "GuessTreeError",
    "Kind",
    "Node",
    "PreconditionViolation",
    "Question",
    "StorageError",
    "StringPool",
    "TextHandle",
    "initialize",
    "load",
    "load_or_init",
    "record_new_distinction",
    "resolve",
    "save",
    "text_of",
    "walk",
]
