"""game.py - Console animal-guessing game driven by a Document"""

from __future__ import annotations

from enum import Enum
from typing import TextIO

from .document import ROOT, Document, record_new_distinction, resolve, text_of
from .exceptions import PreconditionViolation
from .logger import get_logger
from .node import Answer, Question

logger = get_logger(__name__)

WELCOME = "Welcome to Animal Guess. Please think of an Animal.\n"
PROCEED = "Hit 'y' to proceed -> "
GUESS = "I think your animal is {}. Am I correct? -> "
WIN = "I win!\n"
LOSE = "Darnit!\n"
ASK_ANIMAL = "What animal were you thinking of? -> "
ASK_QUESTION = "A unique question that answers yes for {} -> \n"
PLAY_AGAIN = "Play again? -> "


class Response(Enum):
    NONE = 0
    QUIT = 1
    NO = 2
    YES = 3


class Game:
    """
    One interactive session over a Document.

    Replies are read a line at a time: the last y/n on a line wins, q quits at
    once, and end of input counts as quitting. run() does not save; the caller
    decides whether to persist the session's splits.
    """

    def __init__(self, doc: Document, stdin: TextIO, stdout: TextIO) -> None:
        self.doc = doc
        self.stdin = stdin
        self.stdout = stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_response(self) -> Response:
        while True:
            line = self.stdin.readline()
            if not line:
                return Response.QUIT
            result = Response.NONE
            for char in line:
                match char:
                    case "y" | "Y":
                        result = Response.YES
                    case "n" | "N":
                        result = Response.NO
                    case "q" | "Q":
                        return Response.QUIT
            if result is not Response.NONE:
                return result

    def ask(self, prompt: str) -> Response:
        self._write(prompt)
        return self.read_response()

    def read_line(self, prompt: str) -> str:
        self._write(prompt)
        return self.stdin.readline().rstrip("\r\n")

    def learn(self, index: int) -> bool:
        """Ask for the right animal and a question separating it from the guess."""
        self._write(LOSE)
        animal = self.read_line(ASK_ANIMAL)
        if not animal:
            return False
        question = self.read_line(ASK_QUESTION.format(animal))
        if not question:
            return False
        try:
            record_new_distinction(self.doc, index, question, animal)
        except PreconditionViolation as e:
            logger.warning(f"[Game.learn] Ignoring unusable input: {e}")
            return False
        return True

    def run(self) -> int:
        """Play until the player quits; return the number of splits recorded."""
        self._write(WELCOME)
        # q quits here and at a guess; only an explicit n at a guess learns.
        response = self.ask(PROCEED)
        while response is Response.NO:
            response = self.read_response()
        if response is Response.QUIT:
            return 0

        learned = 0
        index = ROOT
        while True:
            node = resolve(self.doc, index)
            match node:
                case Question(yes=yes, no=no):
                    response = self.ask(f"{text_of(self.doc, node.text)} -> ")
                    if response is Response.YES:
                        index = yes
                    elif response is Response.NO:
                        index = no
                    else:
                        break
                case Answer():
                    response = self.ask(GUESS.format(text_of(self.doc, node.text)))
                    if response is Response.YES:
                        self._write(WIN)
                    elif response is Response.NO:
                        if self.learn(index):
                            learned += 1
                    else:
                        break
                    if self.ask(PLAY_AGAIN) is not Response.YES:
                        break
                    index = ROOT
        return learned
