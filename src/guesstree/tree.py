"""tree.py - DecisionTree: growable node table with in-place answer splitting"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from . import metrics
from .config import INITIAL_ANSWER, NODE_MIN_CAPACITY
from .exceptions import PreconditionViolation
from .logger import get_logger
from .node import NODE_DTYPE, Answer, Kind, Node, Question
from .pool import StringPool, TextHandle

logger = get_logger(__name__)


class DecisionTree:
    """
    DecisionTree: dense node table addressed by integer index, plus its StringPool.

    - Index 0 is the root and exists once the tree is initialized or loaded.
    - Indices are never reused or moved; split() rewrites one slot in place
      and appends two new ones.
    - Children are referenced by index, text by pool handle.
    - Capacity doubles (starting at NODE_MIN_CAPACITY) when the table is full.
    """

    def __init__(self, pool: StringPool | None = None) -> None:
        self.pool: StringPool = pool if pool is not None else StringPool()
        self._nodes: NDArray[np.void] = np.zeros(0, dtype=NODE_DTYPE)
        self._count: int = 0

    @classmethod
    def initialize(cls, answer: str = INITIAL_ANSWER) -> DecisionTree:
        """Fresh tree holding a single answer at the root."""
        tree = cls()
        tree.append(Answer(tree.pool.intern(answer)))
        return tree

    @classmethod
    def from_table(cls, pool: StringPool, nodes: NDArray[np.void]) -> DecisionTree:
        """Adopt a decoded node table; capacity equals count."""
        assert nodes.dtype == NODE_DTYPE, f"Expected {NODE_DTYPE}, got {nodes.dtype}"
        tree = cls(pool)
        tree._nodes = nodes
        tree._count = len(nodes)
        return tree

    @property
    def count(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[tuple[int, Node]]:
        for index in range(self._count):
            yield index, self.get(index)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._count:
            raise PreconditionViolation(
                f"Node index {index} out of range (count={self._count})"
            )
        return int(index)

    def get(self, index: int) -> Node:
        row = self._nodes[self._check_index(index)]
        text = TextHandle(self.pool.id, int(row["text"]))
        if row["kind"] == Kind.QUESTION:
            return Question(text, int(row["yes"]), int(row["no"]))
        return Answer(text)

    def text(self, handle: TextHandle) -> str:
        return self.pool.lookup(handle)

    def _to_record(self, node: Node) -> tuple[int, int, int, int]:
        match node:
            case Question(text=text, yes=yes, no=no):
                return (
                    int(Kind.QUESTION),
                    self.pool.offset_of(text),
                    self._check_index(yes),
                    self._check_index(no),
                )
            case Answer(text=text):
                return (int(Kind.ANSWER), self.pool.offset_of(text), 0, 0)
            case _:
                raise PreconditionViolation(f"Not a node: {node!r}")

    def append(self, node: Node) -> int:
        """Store node in the next free slot and return its index."""
        record = self._to_record(node)
        if self._count == self.capacity:
            self._grow()
        self._nodes[self._count] = record
        self._count += 1
        return self._count - 1

    def _grow(self) -> None:
        capacity = NODE_MIN_CAPACITY if self.capacity == 0 else self.capacity * 2
        grown = np.zeros(capacity, dtype=NODE_DTYPE)
        grown[: self._count] = self._nodes[: self._count]
        self._nodes = grown
        logger.debug(f"[DecisionTree] Grew node table to {capacity} slots (count={self._count})")

    def split(self, index: int, question_text: str, wrong_guess_text: str) -> None:
        """
        Turn the answer at index into a question that tells it apart from a new answer.

        The wrong guess's replacement becomes the `yes` child, a copy of the old
        answer becomes the `no` child, and index itself now holds the question,
        so every existing reference to index still resolves.
        """
        old = self.get(index)
        if not isinstance(old, Answer):
            raise PreconditionViolation(f"Node {index} is a question; only answers can be split")
        # Reject bad text before anything is written.
        self.pool.encode(question_text)
        self.pool.encode(wrong_guess_text)

        answer = self.pool.intern(wrong_guess_text)
        question = self.pool.intern(question_text)
        yes = self.append(Answer(answer))
        no = self.append(old)
        self._nodes[index] = self._to_record(Question(question, yes, no))
        logger.debug(f"[DecisionTree.split] node={index} yes={yes} no={no} count={self._count}")
        metrics.record_split()
