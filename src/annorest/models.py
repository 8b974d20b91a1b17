"""Canonical Pydantic models shared across all annorest modules.

This is the single source of truth for data shapes in the project. The models
fall into four groups:

**Annotation model** -- the sole metadata unit found in doc comments:
    :class:`Annotation`.

**Declaration tree** -- the parser-independent view of one source unit that
the declaration walker consumes:
    :class:`Parameter`, :class:`MethodSpec`, :class:`Declaration`, and
    :class:`SourceUnit`.

**Intermediate representation** -- produced by the walker and consumed by
the code generator:
    :class:`HTTPMethod`, :class:`RequestSpec`, and :class:`ParseResult`.

**Configuration model** -- loaded from ``annorest.json`` and merged with
environment variables and CLI flags by :func:`annorest.config.resolve_config`:
    :class:`GeneratorConfig`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Generator Config ---


class GeneratorConfig(BaseModel):
    """Settings for one ``annorest generate`` run.

    See :func:`~annorest.config.resolve_config` for the precedence chain.
    """

    package: Optional[str] = Field(
        default=None,
        description="Import path the generated module imports response types from",
    )
    output: Optional[str] = Field(
        default=None, description="Destination file for the generated source"
    )
    banner: bool = Field(
        default=True, description="Emit the generated-code module docstring"
    )


# --- Annotation ---


class Annotation(BaseModel):
    """A ``@KEY("value")`` marker extracted from a single comment line.

    Immutable once extracted. ``value`` may be the empty string.

    Example::

        Annotation(key="GET", value="/photos/{id}")
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


# --- Declaration tree ---


class Parameter(BaseModel):
    """One parameter of an interface method (``self`` excluded)."""

    name: str
    type: Optional[str] = Field(
        default=None, description="Annotation source text, e.g. 'int' or 'str'"
    )

    @property
    def is_text(self) -> bool:
        """Whether the declared type is already textual."""
        return self.type == "str"

    @property
    def is_bytes(self) -> bool:
        """Whether the declared type is a raw byte payload."""
        return self.type == "bytes"


class MethodSpec(BaseModel):
    """One interface method as seen by the walker and the generator.

    ``doc`` holds the comment lines immediately above the ``def`` (without
    the leading ``#``), closest line last.
    """

    name: str
    doc: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)

    @property
    def doc_line(self) -> str:
        """The first line of the doc comment, where the annotation is read from."""
        return self.doc[0] if self.doc else ""


class Declaration(BaseModel):
    """A top-level type declaration of a source unit.

    Only declarations with ``is_interface`` set can become request specs;
    everything else is walked past.
    """

    name: str
    doc: list[str] = Field(default_factory=list)
    is_interface: bool = False
    methods: list[MethodSpec] = Field(default_factory=list)
    lineno: int = 0


class SourceUnit(BaseModel):
    """A parsed source file: its package name and top-level declarations."""

    package_name: str
    declarations: list[Declaration] = Field(default_factory=list)
    filename: str = "<unknown>"


# --- Intermediate representation ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods a request spec can carry.

    ``POST_FORM`` never appears here: it is canonicalised to ``POST`` when
    the annotation is extracted.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


class RequestSpec(BaseModel):
    """Structured description of one endpoint, derived from one interface.

    Every parameter map is keyed by the annotation *value* (the wire name),
    not by the method name; a later method sharing a value overwrites the
    earlier entry.

    See Also:
        :func:`annorest.parser.walker.walk`: Builds instances of this model.
        :func:`annorest.generator.generate`: Lowers instances to source text.
    """

    package_name: str
    request_type: str
    api_endpoint: str
    http_method: HTTPMethod
    path_substitutions: dict[str, MethodSpec] = Field(default_factory=dict)
    query_params: dict[str, MethodSpec] = Field(default_factory=dict)
    post_form_params: dict[str, MethodSpec] = Field(default_factory=dict)
    post_multipart_params: dict[str, MethodSpec] = Field(default_factory=dict)
    post_params: dict[str, MethodSpec] = Field(default_factory=dict)
    header_params: dict[str, MethodSpec] = Field(default_factory=dict)
    sync_response: Optional[MethodSpec] = None
    async_response: Optional[MethodSpec] = None
    callback_type: str = ""
    response_type: str = ""

    @model_validator(mode="after")
    def _check_response_types(self) -> RequestSpec:
        if self.sync_response is not None and not self.response_type:
            raise ValueError("sync_response requires a response_type")
        if self.async_response is not None and not self.callback_type:
            raise ValueError("async_response requires a callback_type")
        return self


class ParseResult(BaseModel):
    """Every request spec found while walking one source unit."""

    package_name: str
    requests: list[RequestSpec] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """``True`` when no annotated interface was found."""
        return not self.requests
