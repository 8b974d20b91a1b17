"""Extract ``@KEY("value")`` annotations from single comment lines.

The grammar is deliberately small: a literal ``@``, one or more word
characters (the key), ``("``, any characters up to the last ``")`` on the
line (the value, possibly empty), and ``")``. Matching is case-sensitive.

Two key filters decide which annotations are accepted:

* :data:`HTTP_METHOD_KEYS` -- placed above an interface declaration.
* :data:`PARAMETER_KEYS` -- placed above each interface method.

Text that does not match the grammar, or matches with a key outside the
filter, yields ``None``. Extraction never raises.

Example::

    >>> extract_http_annotation('@POST_FORM("/photos")')
    Annotation(key='POST', value='/photos')
    >>> extract_parameter_annotation('@QUERY("image_size")')
    Annotation(key='QUERY', value='image_size')
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from annorest.models import Annotation

ANNOTATION_PATTERN = re.compile(r'@(\w+)\("(.*)"\)')
"""Captures ``('GET', '/photos/{id}')`` from ``@GET("/photos/{id}")``."""

GET = "GET"
POST = "POST"
POST_FORM = "POST_FORM"
PUT = "PUT"
DELETE = "DELETE"
HEAD = "HEAD"

PATH = "PATH"
QUERY = "QUERY"
FIELD = "FIELD"
HEADER = "HEADER"
PART = "PART"
SYNC = "SYNC"
ASYNC = "ASYNC"

HTTP_METHOD_KEYS = frozenset({GET, POST, POST_FORM, PUT, DELETE, HEAD})
PARAMETER_KEYS = frozenset({PATH, QUERY, FIELD, HEADER, PART, SYNC, ASYNC})

KeyFilter = Callable[[str], bool]


def http_method_filter(key: str) -> bool:
    """Accept keys naming an HTTP method (``POST_FORM`` included)."""
    return key in HTTP_METHOD_KEYS


def parameter_filter(key: str) -> bool:
    """Accept keys that route an interface method into a request spec."""
    return key in PARAMETER_KEYS


def extract_annotation(text: str, key_filter: KeyFilter) -> Optional[Annotation]:
    """Match *text* against the annotation grammar and *key_filter*.

    Args:
        text: A single comment line, with or without the leading ``#``.
        key_filter: Predicate deciding whether the captured key is accepted.

    Returns:
        The extracted :class:`~annorest.models.Annotation`, or ``None`` when
        the grammar does not match or the key is filtered out.
    """
    match = ANNOTATION_PATTERN.search(text)
    if match is None or not key_filter(match.group(1)):
        return None
    return Annotation(key=match.group(1), value=match.group(2))


def extract_http_annotation(text: str) -> Optional[Annotation]:
    """Extract an HTTP-method annotation, canonicalising ``POST_FORM`` to ``POST``.

    ``POST_FORM`` only signals the intended body encoding; it lowers exactly
    like ``POST``.
    """
    annotation = extract_annotation(text, http_method_filter)
    if annotation is not None and annotation.key == POST_FORM:
        return Annotation(key=POST, value=annotation.value)
    return annotation


def extract_parameter_annotation(text: str) -> Optional[Annotation]:
    """Extract a parameter annotation (``PATH``, ``QUERY``, ... ``ASYNC``)."""
    return extract_annotation(text, parameter_filter)
