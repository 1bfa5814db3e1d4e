"""document.py - Document: one knowledge base (node table + string pool) and its
query/update interface for front ends.

Front ends never touch the node table directly. They call:

    load_or_init(path)                      -> Document
    resolve(doc, index)                     -> Answer | Question
    text_of(doc, handle)                    -> str
    record_new_distinction(doc, i, q, a)    (wraps DecisionTree.split)
    save(doc, path)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from . import metrics, storage
from .config import INITIAL_ANSWER
from .exceptions import StorageError
from .logger import get_logger
from .node import Node, Question
from .pool import StringPool, TextHandle
from .tree import DecisionTree

logger = get_logger(__name__)

ROOT = 0


@dataclass
class Document:
    tree: DecisionTree

    @property
    def pool(self) -> StringPool:
        return self.tree.pool

    @property
    def count(self) -> int:
        return self.tree.count


def initialize(answer: str = INITIAL_ANSWER) -> Document:
    metrics.record_load("init")
    return Document(DecisionTree.initialize(answer))


def load(path: str | Path) -> Document:
    """Read an existing knowledge base; a missing file is a StorageError."""
    doc = Document(storage.read(path))
    metrics.record_load("file")
    return doc


def load_or_init(path: str | Path) -> Document:
    """
    Load path if it exists, otherwise start from the single-answer document.

    A file that exists but fails to parse raises FormatError; it is never
    silently replaced.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"[load_or_init] {path} not found; starting a new knowledge base")
        return initialize()
    return load(path)


def resolve(doc: Document, index: int) -> Node:
    return doc.tree.get(index)


def text_of(doc: Document, handle: TextHandle) -> str:
    return doc.pool.lookup(handle)


def record_new_distinction(
    doc: Document, at_index: int, question_text: str, wrong_answer_text: str
) -> None:
    doc.tree.split(at_index, question_text, wrong_answer_text)


def save(doc: Document, path: str | Path) -> None:
    """Overwrite path with the whole document."""
    try:
        storage.write(doc.tree, path)
    except StorageError:
        logger.error(f"[save] Could not write knowledge base to {path}")
        raise
    metrics.record_save()


def walk(doc: Document) -> Iterator[tuple[int, str | None, int, Node]]:
    """Pre-order traversal from the root yielding (depth, branch, index, node)."""
    stack: list[tuple[int, str | None, int]] = [(0, None, ROOT)]
    while stack:
        depth, branch, index = stack.pop()
        node = resolve(doc, index)
        yield depth, branch, index, node
        if isinstance(node, Question):
            stack.append((depth + 1, "no", node.no))
            stack.append((depth + 1, "yes", node.yes))
