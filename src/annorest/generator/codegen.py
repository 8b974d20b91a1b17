"""Lower request specs to Python source using Jinja2 templates.

This module is the core of the generation pipeline. It takes a
:class:`~annorest.models.ParseResult` and produces one Python module
containing, for every :class:`~annorest.models.RequestSpec`:

* a callback protocol (only when a request spec uses ``@ASYNC``; one per distinct
  callback name across the module);
* a ``<RequestType>Impl`` builder class with one fluent setter per
  categorised interface method;
* ``_apply_path_substitutions`` and ``_build``, the request-assembly
  routine (JSON body > form > multipart for POST/PUT, query string for
  GET/DELETE/HEAD, header params, then ``Accept: application/json``);
* the synchronous and asynchronous execution wrappers, each gated on the
  presence of ``@SYNC`` / ``@ASYNC``;
* a ``new_<request_type>`` constructor function.

The generation process:

1. A Jinja2 environment is configured with templates from
   ``generator/templates/`` and the filters in
   :mod:`~annorest.generator.naming`.
2. The module-level context (imports, callbacks) is assembled from all specs.
3. ``module.py.j2`` is rendered and passed through
   :func:`~annorest.generator.formatting.format_source`.

Generation is all-or-nothing: any failure raises
:class:`~annorest.exceptions.GenerationError` and no text is returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from annorest.exceptions import GenerationError
from annorest.generator import naming
from annorest.generator.formatting import format_source
from annorest.models import ParseResult, RequestSpec
from annorest.output import debug, warning


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

MODULE_TEMPLATE = "module.py.j2"


def generate(
    result: ParseResult,
    filename: str = "<unknown>",
    banner: bool = True,
) -> str:
    """Generate the builder module for every request spec in *result*.

    Args:
        result: Output of :func:`~annorest.parser.walker.walk`.
        filename: Name of the input file, quoted in the module docstring.
        banner: Emit the "generated, do not edit" module docstring.

    Returns:
        The formatted Python source, or an empty string when *result*
        holds no request specs.

    Raises:
        GenerationError: If a template fails to render, a setter method has
            no parameters, or the rendered text is not valid Python.

    Example::

        source = generate(walk(unit), filename="photos/api.py")
    """
    if result.is_empty:
        debug("No annotated interfaces found, nothing to generate")
        return ""

    for spec in result.requests:
        if spec.async_response is not None and not is_async_ready(spec):
            warning(
                f"{spec.request_type}.{spec.async_response.name}: @ASYNC requires a "
                "@SYNC method with a response type, async wrapper skipped"
            )

    env = create_environment()
    context = build_context(result, filename, banner)
    try:
        rendered = env.get_template(MODULE_TEMPLATE).render(context)
    except TemplateError as exc:
        raise GenerationError(f"Failed to render template: {exc}") from exc

    source = format_source(rendered)
    debug(f"Generated {len(result.requests)} builder(s), {len(source)} bytes")
    return source


def create_environment() -> Environment:
    """Create the Jinja2 environment for the builder templates.

    Autoescape is off (the output is Python, not HTML), undefined variables
    raise, and block trimming keeps the templates readable.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters.update(
        {
            "params_list": naming.params_list,
            "first_param": naming.first_param,
            "raw_value": naming.raw_value,
            "text_value": naming.text_value,
            "bytes_value": naming.bytes_value,
            "snake_case": naming.snake_case,
            "pyrepr": naming.pyrepr,
        }
    )
    env.tests["async_ready"] = is_async_ready
    return env


def is_async_ready(spec: RequestSpec) -> bool:
    """Whether *spec* has everything the asynchronous wrapper needs."""
    return bool(
        spec.async_response is not None
        and spec.callback_type
        and spec.sync_response is not None
        and spec.response_type
    )


def build_context(result: ParseResult, filename: str, banner: bool) -> dict[str, Any]:
    """Assemble the template context for the whole module.

    Callback protocols are deduplicated by name, keeping the first spec's
    response type. Names imported from the input package are the request
    interfaces and every response type, sorted for stable output.
    """
    callbacks: dict[str, str] = {}
    for spec in result.requests:
        if spec.callback_type and spec.callback_type not in callbacks:
            callbacks[spec.callback_type] = spec.response_type

    uses_sync = any(s.sync_response is not None and s.response_type for s in result.requests)
    uses_threading = any(is_async_ready(s) for s in result.requests)

    typing_names = ["Any"]
    if uses_sync:
        typing_names.append("Optional")
    if callbacks:
        typing_names.append("Protocol")

    imported: set[str] = set()
    for spec in result.requests:
        imported.add(spec.request_type)
        if spec.response_type:
            imported.add(spec.response_type)
    # Callbacks are defined in the generated module itself.
    imported -= set(callbacks)

    return {
        "banner": banner,
        "filename": filename,
        "package_name": result.package_name,
        "package_imports": sorted(imported) if result.package_name else [],
        "typing_names": typing_names,
        "uses_sync": uses_sync,
        "uses_threading": uses_threading,
        "callbacks": [
            {"name": name, "response_type": response_type}
            for name, response_type in callbacks.items()
        ],
        "requests": result.requests,
    }
