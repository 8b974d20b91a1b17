"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~annorest.exceptions.AnnorestError` subclass.
Build scripts can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ annorest generate -i api.py -o api_gen.py --pkg photos.api
    $ echo $?
    7   # EXIT_SOURCE_PARSE_ERROR -- the input file is not valid Python
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_SOURCE_PARSE_ERROR = 7
"""The input source could not be read or parsed."""

EXIT_GENERATION_ERROR = 8
"""Code generation failed (template error or malformed emitted source)."""

EXIT_WRITE_ERROR = 9
"""The generated source could not be written to its destination."""
