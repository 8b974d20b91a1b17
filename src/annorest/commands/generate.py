"""Generate command -- render builder source from an annotated interface file.

Implements the ``annorest generate`` top-level command. It reads the input
source (a file or stdin), walks every annotated ``Protocol`` class into a
:class:`~annorest.models.RequestSpec`, renders the builder module and writes
it atomically. Nothing is written when any stage fails.
"""

from __future__ import annotations

from typing import Optional

import typer

from annorest.exceptions import AnnorestError, InvalidUsageError
from annorest.output import debug, error, get_output, info, success, warning


def generate_command(
    input: str = typer.Option(
        "-",
        "--input",
        "-i",
        help="Annotated Python source file (use '-' for stdin).",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Destination file for the generated module."
    ),
    pkg: Optional[str] = typer.Option(
        None, "--pkg", help="Import path the generated module imports types from."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the generated source instead of writing it."
    ),
    no_banner: bool = typer.Option(
        False, "--no-banner", help="Omit the generated-code module docstring."
    ),
) -> None:
    """Generate request builders from annotated interfaces.

    Args:
        input: Path to the source file, or ``-`` for stdin.
        output: Destination path. Falls back to ``ANNOREST_OUTPUT`` and then
            ``annorest.json``. Not required with ``--dry-run``.
        pkg: Package the interfaces and response types live in. Falls back
            to ``ANNOREST_PKG`` and then ``annorest.json``.
        dry_run: Print the source to stdout instead of writing a file.
        no_banner: Leave out the "generated, do not edit" docstring.

    Raises:
        typer.Exit: With the error's exit code (2 for usage errors, 7 for
            unparsable input, 8 for generation failures, 9 for write
            failures).

    Example::

        annorest generate -i photos/api.py -o photos/_generated.py --pkg photos.api
        cat api.py | annorest generate --pkg photos.api --dry-run
    """
    try:
        _run(input, output, pkg, dry_run, no_banner)
    except AnnorestError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _run(
    input: str,
    output: Optional[str],
    pkg: Optional[str],
    dry_run: bool,
    no_banner: bool,
) -> None:
    from annorest.config import resolve_config
    from annorest.generator import generate
    from annorest.parser import load_source, parse_source, walk
    from annorest.writer import write_generated

    config = resolve_config(
        cli_package=pkg,
        cli_output=output,
        cli_banner=False if no_banner else None,
    )
    if not config.package:
        raise InvalidUsageError(
            "No package given. Pass --pkg, set ANNOREST_PKG or add 'package' "
            "to annorest.json"
        )
    if not config.output and not dry_run:
        raise InvalidUsageError(
            "No output file given. Pass --output, set ANNOREST_OUTPUT or add "
            "'output' to annorest.json"
        )

    filename = "<stdin>" if input == "-" else input
    debug(f"Reading source from {filename}")
    text = load_source(input)
    unit = parse_source(text, package_name=config.package, filename=filename)
    result = walk(unit)

    if result.is_empty:
        warning(f"No annotated interfaces found in {filename}, nothing generated")
        return

    source = generate(result, filename=filename, banner=config.banner)

    if dry_run:
        get_output().print_source(source)
        return

    path = write_generated(config.output, source)
    names = ", ".join(spec.request_type for spec in result.requests)
    info(f"Builders: {names}")
    success(f"Wrote {path}")
