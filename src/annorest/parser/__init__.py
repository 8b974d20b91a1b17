"""Source parser -- load annotated interfaces and build request specs.

This sub-package is responsible for the first half of the annorest pipeline:
turning Python source that declares annotated ``Protocol`` classes into a
:class:`~annorest.models.ParseResult` that the generator can consume.

Typical usage::

    from annorest.parser import load_source, parse_source, walk

    text = load_source("photos/api.py")
    unit = parse_source(text, package_name="photos.api", filename="photos/api.py")
    result = walk(unit)

Sub-modules:

* :mod:`~annorest.parser.annotations` -- The ``@KEY("value")`` grammar and
  the HTTP-method / parameter key filters.
* :mod:`~annorest.parser.source` -- I/O layer (file, stdin) and the
  :mod:`ast` front end producing a :class:`~annorest.models.SourceUnit`.
* :mod:`~annorest.parser.walker` -- The declaration walker that routes
  interface methods into :class:`~annorest.models.RequestSpec` slots.
"""

from annorest.parser.annotations import (
    extract_http_annotation,
    extract_parameter_annotation,
)
from annorest.parser.source import load_source, parse_source
from annorest.parser.walker import walk

__all__ = [
    "extract_http_annotation",
    "extract_parameter_annotation",
    "load_source",
    "parse_source",
    "walk",
]
