"""node.py - Node variants and the packed node-table dtype for GuessTree"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

import numpy as np

from .pool import TextHandle


class Kind(IntEnum):
    QUESTION = 0
    ANSWER = 1


# One row per node; answers leave yes/no at 0.
NODE_DTYPE = np.dtype([
    ("kind", "u1"),
    ("text", "<u4"),
    ("yes", "<u4"),
    ("no", "<u4"),
])


class Answer(NamedTuple):
    """Leaf: a guess."""

    text: TextHandle

    @property
    def kind(self) -> Kind:
        return Kind.ANSWER


class Question(NamedTuple):
    """Internal node: follow `yes` or `no` depending on the player's reply."""

    text: TextHandle
    yes: int
    no: int

    @property
    def kind(self) -> Kind:
        return Kind.QUESTION


Node = Answer | Question
