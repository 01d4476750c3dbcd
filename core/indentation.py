"""
Indentation reconstruction for recognized code

OCR output has no leading whitespace. This module rebuilds block
indentation from lexical cues with a single-pass state machine:

- A line starting with a block keyword, or ending with ':', opens a block
  (indent level + 1). The line right after it is emitted at the new level
  and never re-triggers indent/dedent logic.
- A line starting with return/pass/break closes a block (level - 1,
  never below 0).

This is a heuristic tuned for Python, not a parser: the result is not
guaranteed to be syntactically correct.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import INDENT_UNIT

INDENT_KEYWORDS = (
    "if", "for", "while", "def", "class", "try", "except", "with",
    "else:", "elif", "finally:",
)

DEDENT_KEYWORDS = ("return", "pass", "break")


@dataclass
class IndentState:
    """State carried between lines"""
    indent_level: int = 0
    just_indented: bool = False


class IndentationReconstructor:
    """
    Keyword/suffix driven indentation state machine

    Keyword lists are parameters so they can be changed; the evaluation
    order (indent check, then dedent check) stays the same.
    """

    def __init__(
        self,
        indent_keywords: Iterable[str] = INDENT_KEYWORDS,
        dedent_keywords: Iterable[str] = DEDENT_KEYWORDS,
        indent_unit: str = INDENT_UNIT,
    ):
        self.indent_keywords = tuple(indent_keywords)
        self.dedent_keywords = tuple(dedent_keywords)
        self.indent_unit = indent_unit

    def opens_block(self, line: str) -> bool:
        """Check if a trimmed line triggers an indent"""
        return line.startswith(self.indent_keywords) or line.endswith(":")

    def closes_block(self, line: str) -> bool:
        """Check if a trimmed line triggers a dedent"""
        return line.startswith(self.dedent_keywords)

    def reconstruct_lines(
        self,
        raw_text: str,
        state: Optional[IndentState] = None,
    ) -> List[Tuple[int, str]]:
        """
        Assign an indent level to every line

        Args:
            raw_text: Flat recognized text
            state: Starting state (mutated in place; default: level 0)

        Returns:
            List of (indent_level, trimmed_line); blank lines are (0, "")
        """
        if state is None:
            state = IndentState()

        result: List[Tuple[int, str]] = []

        for line in raw_text.split("\n"):
            trimmed = line.strip()

            # Blank lines bypass the state machine entirely
            if not trimmed:
                result.append((0, ""))
                continue

            result.append((state.indent_level, trimmed))

            if state.just_indented:
                state.just_indented = False
                continue

            if self.opens_block(trimmed):
                state.indent_level += 1
                state.just_indented = True

            if self.closes_block(trimmed):
                state.indent_level = max(0, state.indent_level - 1)

        return result

    def reconstruct(self, raw_text: str) -> str:
        """
        Convert flat recognized text into indented code

        Every emitted line ends with a newline.

        Example:
            reconstruct("if x:\\n  y")  # "if x:\\n    y\\n"
        """
        return "".join(
            f"{self.indent_unit * level}{text}\n" if text else "\n"
            for level, text in self.reconstruct_lines(raw_text)
        )


_default = IndentationReconstructor()


def reconstruct(raw_text: str) -> str:
    """Reconstruct indentation with the default keyword lists"""
    return _default.reconstruct(raw_text)
