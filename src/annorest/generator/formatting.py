"""Normalise rendered template output and reject malformed source."""

from __future__ import annotations

import ast
import re

from annorest.exceptions import GenerationError

_EXCESS_BLANK_LINES = re.compile(r"\n{4,}")


def format_source(text: str) -> str:
    """Tidy whitespace in *text* and check that it parses as Python.

    Trailing whitespace is stripped from every line, runs of more than two
    blank lines collapse to two, leading blank lines are dropped and the
    file ends with exactly one newline.

    Raises:
        GenerationError: If the normalised text is not valid Python.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    source = "\n".join(lines).strip("\n")
    source = _EXCESS_BLANK_LINES.sub("\n\n\n", source) + "\n"
    try:
        ast.parse(source)
    except SyntaxError as exc:
        raise GenerationError(
            f"Generated source is not valid Python (line {exc.lineno}): {exc.msg}"
        ) from exc
    return source
