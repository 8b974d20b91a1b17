"""Built-in CLI sub-commands for annorest.

* :mod:`~annorest.commands.generate` -- render builder source from an
  annotated interface file.
* :mod:`~annorest.commands.inspect` -- print the request specs found in a
  file as JSON.

Each module exports a plain callback function registered directly on the
root app in :mod:`annorest.app`.
"""
