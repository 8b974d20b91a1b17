"""Inspect command -- show the request specs found in a source file.

Implements ``annorest inspect``, a read-only view of the intermediate
representation. The :class:`~annorest.models.ParseResult` is printed to
stdout as JSON so it can be piped into other tools.
"""

from __future__ import annotations

from typing import Optional

import typer

from annorest.exceptions import AnnorestError
from annorest.output import error, get_output


def inspect_command(
    input: str = typer.Argument(
        "-", help="Annotated Python source file (use '-' for stdin)."
    ),
    pkg: Optional[str] = typer.Option(
        None, "--pkg", help="Package name recorded in the request specs."
    ),
) -> None:
    """Print the request specs of *input* as JSON.

    Example::

        annorest inspect photos/api.py --pkg photos.api
    """
    from annorest.config import resolve_config
    from annorest.parser import load_source, parse_source, walk

    try:
        config = resolve_config(cli_package=pkg)
        filename = "<stdin>" if input == "-" else input
        text = load_source(input)
        unit = parse_source(text, package_name=config.package or "", filename=filename)
        result = walk(unit)
    except AnnorestError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().print_json(result.model_dump(mode="json"))
