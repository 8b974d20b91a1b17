"""Walk a declaration tree and collect one request spec per annotated interface.

The walker is a small state machine driven over the top-level declarations
of a :class:`~annorest.models.SourceUnit`:

* ``IDLE`` -- the initial state for each declaration.
* ``COLLECTING_METHODS`` -- entered when the declaration's doc comment
  carries an HTTP-method annotation (``@GET("/photos/{id}")``). The
  declaration must be an interface; otherwise the pending endpoint is
  discarded and the walker returns to ``IDLE`` without error.

While collecting, each method of the interface is routed by its parameter
annotation into exactly one slot of a fresh
:class:`~annorest.models.RequestSpec`. Methods without a recognised
annotation are dropped. Each qualifying interface yields its own spec, so a
unit with several annotated interfaces produces several builders.

The single public entry point is :func:`walk`.
"""

from __future__ import annotations

import enum
from typing import Optional

from annorest.models import (
    Annotation,
    Declaration,
    HTTPMethod,
    MethodSpec,
    ParseResult,
    RequestSpec,
    SourceUnit,
)
from annorest.output import debug
from annorest.parser import annotations as ann


class WalkState(str, enum.Enum):
    """States of the per-declaration accumulator."""

    IDLE = "idle"
    COLLECTING_METHODS = "collecting_methods"


# Annotation key -> RequestSpec map attribute, for the map-valued slots.
_PARAMETER_SLOTS: dict[str, str] = {
    ann.PATH: "path_substitutions",
    ann.QUERY: "query_params",
    ann.FIELD: "post_form_params",
    ann.HEADER: "header_params",
    ann.PART: "post_multipart_params",
}


class DeclarationWalker:
    """Single-pass walker over one source unit.

    Holds the current :class:`WalkState` and the request spec accumulated for
    the declaration under inspection. A walker instance is used for exactly
    one unit; :func:`walk` creates a fresh one per call.

    Args:
        unit: The declaration tree to walk.
    """

    def __init__(self, unit: SourceUnit) -> None:
        self._unit = unit
        self._state = WalkState.IDLE
        self._pending: Optional[Annotation] = None
        self._result = ParseResult(package_name=unit.package_name)

    @property
    def state(self) -> WalkState:
        """The current walker state."""
        return self._state

    def walk(self) -> ParseResult:
        """Visit every declaration in order and return the collected specs."""
        for declaration in self._unit.declarations:
            self._visit_declaration(declaration)
        return self._result

    # ------------------------------------------------------------------ #
    # Visitors
    # ------------------------------------------------------------------ #

    def _visit_declaration(self, declaration: Declaration) -> None:
        self._state = WalkState.IDLE
        self._pending = None

        for line in declaration.doc:
            annotation = ann.extract_http_annotation(line)
            if annotation is not None:
                self._pending = annotation
                self._state = WalkState.COLLECTING_METHODS

        if self._state is not WalkState.COLLECTING_METHODS:
            return

        if not declaration.is_interface:
            debug(
                f"{declaration.name}: @{self._pending.key} found on a non-interface "
                "declaration, skipping"
            )
            self._state = WalkState.IDLE
            self._pending = None
            return

        spec = RequestSpec(
            package_name=self._unit.package_name,
            request_type=declaration.name,
            api_endpoint=self._pending.value,
            http_method=HTTPMethod(self._pending.key),
        )
        debug(
            f"{declaration.name} (line {declaration.lineno}): "
            f"{spec.http_method.value} {spec.api_endpoint}"
        )

        for method in declaration.methods:
            self._visit_method(spec, method)

        self._result.requests.append(spec)
        self._state = WalkState.IDLE
        self._pending = None

    def _visit_method(self, spec: RequestSpec, method: MethodSpec) -> None:
        annotation = ann.extract_parameter_annotation(method.doc_line)
        if annotation is None:
            debug(f"{spec.request_type}.{method.name}: no annotation, dropped")
            return

        slot = _PARAMETER_SLOTS.get(annotation.key)
        if slot is not None:
            getattr(spec, slot)[annotation.value] = method
        elif not annotation.value:
            debug(
                f"{spec.request_type}.{method.name}: @{annotation.key} needs a type "
                "name, dropped"
            )
        elif annotation.key == ann.SYNC:
            spec.sync_response = method
            spec.response_type = annotation.value
        elif annotation.key == ann.ASYNC:
            spec.async_response = method
            spec.callback_type = annotation.value


def walk(unit: SourceUnit) -> ParseResult:
    """Walk *unit* and return a :class:`~annorest.models.ParseResult`.

    Args:
        unit: The declaration tree produced by
            :func:`~annorest.parser.source.parse_source` (or any other
            front end producing the same model).

    Returns:
        One :class:`~annorest.models.RequestSpec` per annotated interface,
        in declaration order. Empty when the unit has none.

    Example::

        unit = parse_source(text, package_name="photos.api")
        result = walk(unit)
        for spec in result.requests:
            print(spec.http_method.value, spec.api_endpoint)
    """
    return DeclarationWalker(unit).walk()
