"""Configuration loading and precedence resolution.

annorest keeps no global state on disk. The only persistent configuration is
an optional project-local ``annorest.json`` in the current directory, which a
repository uses to pin the generated module's destination and the package
response types are imported from::

    {"package": "photos.api", "output": "photos/_generated.py"}

:func:`resolve_config` layers environment variables and CLI flags on top of
that file to produce the effective :class:`~annorest.models.GeneratorConfig`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from annorest.exceptions import ConfigError
from annorest.models import GeneratorConfig

_PROJECT_CONFIG_FILENAME = "annorest.json"

ENV_PACKAGE = "ANNOREST_PKG"
ENV_OUTPUT = "ANNOREST_OUTPUT"


# --- Project-local config ---


def project_config_path() -> Path:
    """Path to the project config file in the current working directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./annorest.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_package: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_banner: Optional[bool] = None,
) -> GeneratorConfig:
    """Resolve the generator settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_package``, ``cli_output``, ``cli_banner``)
        2. Environment variables (``ANNOREST_PKG``, ``ANNOREST_OUTPUT``)
        3. Project config (``./annorest.json``)
        4. Defaults

    Raises:
        ConfigError: If the project config is malformed.
    """
    # 4 + 3. Defaults, then project-local config
    project = load_project_config() or {}
    try:
        config = GeneratorConfig.model_validate(project)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config at {project_config_path()}: {exc}") from exc

    # 2. Environment variables
    env_package = os.environ.get(ENV_PACKAGE)
    if env_package:
        config.package = env_package
    env_output = os.environ.get(ENV_OUTPUT)
    if env_output:
        config.output = env_output

    # 1. CLI flags
    if cli_package is not None:
        config.package = cli_package
    if cli_output is not None:
        config.output = cli_output
    if cli_banner is not None:
        config.banner = cli_banner

    return config
