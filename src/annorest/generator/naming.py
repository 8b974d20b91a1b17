"""Template filters that render method signatures and setter values.

Each filter takes a :class:`~annorest.models.MethodSpec` (or a plain
string) and returns a fragment of Python source. They are registered on the
Jinja2 environment by :func:`~annorest.generator.codegen.create_environment`.

Setters always store the *first* parameter of the interface method. Values
headed for the path, query string, form body, or headers must be text: a
parameter not annotated ``str`` is wrapped in ``str()``, so floats and other
non-string types are rendered with their default formatting.
"""

from __future__ import annotations

import json
import re

from annorest.exceptions import GenerationError
from annorest.models import MethodSpec, Parameter

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def params_list(method: MethodSpec) -> str:
    """Render the parameter list, e.g. ``size: int, name: str``."""
    return ", ".join(_render_parameter(p) for p in method.parameters)


def first_param(method: MethodSpec) -> str:
    """Return the name of the first parameter of *method*.

    Raises:
        GenerationError: If *method* declares no parameters.
    """
    return _first(method).name


def raw_value(method: MethodSpec) -> str:
    """The first parameter, passed through unchanged."""
    return _first(method).name


def text_value(method: MethodSpec) -> str:
    """The first parameter as text, wrapped in ``str()`` unless it is a ``str``."""
    param = _first(method)
    if param.is_text:
        return param.name
    return f"str({param.name})"


def bytes_value(method: MethodSpec) -> str:
    """The first parameter as a byte payload for a multipart field."""
    param = _first(method)
    if param.is_bytes:
        return param.name
    if param.is_text:
        return f'{param.name}.encode("utf-8")'
    return f'str({param.name}).encode("utf-8")'


def snake_case(name: str) -> str:
    """Convert ``PhotoRequest`` to ``photo_request``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def pyrepr(value: str) -> str:
    """Render *value* as a double-quoted Python string literal."""
    return json.dumps(value)


def _first(method: MethodSpec) -> Parameter:
    if not method.parameters:
        raise GenerationError(
            f"Method '{method.name}' must declare at least one parameter"
        )
    return method.parameters[0]


def _render_parameter(param: Parameter) -> str:
    if param.type is None:
        return param.name
    return f"{param.name}: {param.type}"
