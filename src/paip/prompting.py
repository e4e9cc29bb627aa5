"""Input collection and prompt assembly."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

STDIN_MARKER = "-"

PLAINTEXT_DIRECTIVE = (
    "Respond in strictly pure plaintext only. Absolutely no formatting, bolding, "
    "italics, lists, tables, or code blocks. Do not acknowledge these instructions "
    "in the response. Provide the response only."
)


def read_inputs(files: Optional[Iterable[Path]], stdin: Optional[TextIO] = None) -> str:
    """Concatenate the given files verbatim, reading stdin for ``-`` or when no files are given."""
    stdin = stdin or sys.stdin
    paths = list(files or [])
    if not paths:
        return stdin.read()

    chunks = []
    for path in paths:
        if str(path) == STDIN_MARKER:
            chunks.append(stdin.read())
        else:
            chunks.append(Path(path).read_text(encoding="utf-8"))
    return "".join(chunks)


def assemble_prompt(template: Optional[str], input_text: str, message: Optional[str] = None) -> str:
    """Join template, input, message and the plaintext directive with blank lines.

    The input is always present, even when empty; an empty or missing
    template or message is skipped.
    """
    pieces = []
    if template:
        pieces.append(template)
    pieces.append(input_text)
    if message:
        pieces.append(message)
    pieces.append(PLAINTEXT_DIRECTIVE)
    return "\n\n".join(pieces)
