"""Code generator -- lower request specs to fluent builder source.

This sub-package is responsible for the second half of the annorest
pipeline: taking a :class:`~annorest.models.ParseResult` (produced by the
parser) and rendering one Python module with a request builder per spec.

Typical usage::

    from annorest.generator import generate

    source = generate(result, filename="photos/api.py")

Sub-modules:

* :mod:`~annorest.generator.codegen` -- Jinja2 environment, template
  context assembly, and the :func:`generate` entry point.
* :mod:`~annorest.generator.naming` -- Template filters rendering parameter
  lists and setter values.
* :mod:`~annorest.generator.formatting` -- Whitespace normalisation and the
  final parse check of the emitted text.
"""

from annorest.generator.codegen import generate

__all__ = ["generate"]
