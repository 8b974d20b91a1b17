"""Load Python source and turn it into a :class:`~annorest.models.SourceUnit`.

This module is the front end that feeds the declaration walker. It reads the
input (a local file or stdin), parses it with :mod:`ast`, and reduces the
syntax tree to the parser-independent declaration model:

* every top-level ``class`` statement becomes a
  :class:`~annorest.models.Declaration`;
* a declaration is an *interface* when one of its bases is ``Protocol``
  (bare, ``typing.Protocol``, ``typing_extensions.Protocol`` or
  subscripted);
* each ``def`` in an interface body becomes a
  :class:`~annorest.models.MethodSpec` with ``self``/``cls`` removed;
* the *doc comment* of a statement is the block of contiguous ``#`` lines
  directly above it (above its decorators, if any).

:mod:`ast` drops comments, so doc comments are recovered from the raw source
lines using the statement line numbers.

Example input::

    # @GET("/photos/{id}")
    class PhotoRequest(Protocol):
        # @PATH("id")
        def photo_id(self, id: str) -> PhotoRequest: ...
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Union

from annorest.exceptions import SourceParseError
from annorest.models import Declaration, MethodSpec, Parameter, SourceUnit

_PROTOCOL_MODULES = frozenset({"typing", "typing_extensions"})
_IMPLICIT_FIRST_ARGS = frozenset({"self", "cls"})

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


def load_source(source: str) -> str:
    """Read source text from a file path, or from stdin when *source* is ``'-'``.

    Args:
        source: A file path, or ``'-'`` for stdin.

    Returns:
        The source text.

    Raises:
        SourceParseError: If the input cannot be read or is empty.
    """
    if source == "-":
        try:
            content = sys.stdin.read()
        except OSError as exc:
            raise SourceParseError(f"Failed to read from stdin: {exc}") from exc
        if not content.strip():
            raise SourceParseError("No input received from stdin")
        return content

    file_path = Path(source)
    if not file_path.is_file():
        raise SourceParseError(f"Input file not found: {source}")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceParseError(f"Cannot read input file {source}: {exc}") from exc


def parse_source(
    text: str,
    package_name: str,
    filename: str = "<unknown>",
) -> SourceUnit:
    """Parse Python *text* into a :class:`~annorest.models.SourceUnit`.

    Args:
        text: Python source code.
        package_name: Import path of the module the source belongs to. The
            generated code imports response types from it.
        filename: Used in error messages only.

    Returns:
        The declaration tree for the unit.

    Raises:
        SourceParseError: If *text* is not syntactically valid Python.
    """
    try:
        tree = ast.parse(text, filename=filename)
    except SyntaxError as exc:
        raise SourceParseError(
            f"Failed to parse {filename} (line {exc.lineno}): {exc.msg}"
        ) from exc

    lines = text.splitlines()
    declarations = [
        _to_declaration(node, lines)
        for node in tree.body
        if isinstance(node, ast.ClassDef)
    ]
    return SourceUnit(
        package_name=package_name,
        declarations=declarations,
        filename=filename,
    )


def _to_declaration(node: ast.ClassDef, lines: list[str]) -> Declaration:
    is_interface = any(_is_protocol_base(base) for base in node.bases)
    methods: list[MethodSpec] = []
    if is_interface:
        methods = [
            _to_method(child, lines)
            for child in node.body
            if isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef))
        ]
    return Declaration(
        name=node.name,
        doc=_doc_comment(node, lines),
        is_interface=is_interface,
        methods=methods,
        lineno=node.lineno,
    )


def _to_method(node: FunctionNode, lines: list[str]) -> MethodSpec:
    args = node.args
    positional = [*args.posonlyargs, *args.args]
    if positional and positional[0].arg in _IMPLICIT_FIRST_ARGS:
        positional = positional[1:]

    parameters = [
        Parameter(
            name=arg.arg,
            type=ast.unparse(arg.annotation) if arg.annotation is not None else None,
        )
        for arg in [*positional, *args.kwonlyargs]
    ]
    return MethodSpec(
        name=node.name,
        doc=_doc_comment(node, lines),
        parameters=parameters,
    )


def _is_protocol_base(base: ast.expr) -> bool:
    """Return True if *base* names ``Protocol`` (optionally subscripted)."""
    if isinstance(base, ast.Subscript):
        base = base.value
    if isinstance(base, ast.Name):
        return base.id == "Protocol"
    if isinstance(base, ast.Attribute):
        return (
            base.attr == "Protocol"
            and isinstance(base.value, ast.Name)
            and base.value.id in _PROTOCOL_MODULES
        )
    return False


def _doc_comment(
    node: Union[ast.ClassDef, FunctionNode],
    lines: list[str],
) -> list[str]:
    """Collect the contiguous ``#`` lines directly above *node*.

    Returns the comment texts without the ``#`` marker, top to bottom.
    """
    first_line = min([node.lineno, *(d.lineno for d in node.decorator_list)])
    doc: list[str] = []
    index = first_line - 2  # 0-based index of the line above the statement
    while index >= 0:
        stripped = lines[index].strip()
        if not stripped.startswith("#"):
            break
        doc.append(stripped[1:].strip())
        index -= 1
    doc.reverse()
    return doc
