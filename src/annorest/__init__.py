"""annorest -- Generate fluent HTTP request builders from annotated interfaces.

This package reads Python source containing ``typing.Protocol`` classes whose
doc comments carry ``@KEY("value")`` annotations, and emits a Python module
implementing one fluent request builder per annotated interface.

Typical workflow::

    annorest generate --input photos/api.py --output photos/api_gen.py --pkg photos.api

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Generator configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    writer: Atomic writes of generated source.
"""

__version__ = "0.1.0"
