"""Shared test fixtures for annorest.

Provides annotated source fixtures, isolated config environments, output
state management, and a CLI runner. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from annorest.models import ParseResult, SourceUnit
from annorest.output import OutputFormat, OutputManager, reset_output, set_output


PHOTO_SOURCE = textwrap.dedent(
    '''
    from __future__ import annotations

    from typing import Protocol


    class PhotoResponse:
        """Decoded photo payload."""


    # Fetch a single photo.
    # @GET("/photos/{id}")
    class PhotoRequest(Protocol):
        # @PATH("id")
        def photo_id(self, id: str) -> PhotoRequest: ...

        # @QUERY("image_size")
        def image_size(self, size: int) -> PhotoRequest: ...

        # @HEADER("X-Trace")
        def trace(self, value: str) -> PhotoRequest: ...

        # @SYNC("PhotoResponse")
        def photo(self): ...

        # @ASYNC("PhotoCallback")
        def photo_async(self, callback: PhotoCallback) -> None: ...
    '''
)

UPLOAD_SOURCE = textwrap.dedent(
    '''
    from typing import Protocol


    # @POST_FORM("/users/{user}/photos")
    class UploadRequest(Protocol):
        # @PATH("user")
        def user(self, user: str) -> UploadRequest: ...

        # @FIELD("title")
        def title(self, title: str) -> UploadRequest: ...

        # @FIELD("rating")
        def rating(self, rating: float) -> UploadRequest: ...

        # @PART("image")
        def image(self, data: bytes) -> UploadRequest: ...

        # @SYNC("UploadResponse")
        def upload(self): ...
    '''
)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Annotated source fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def photo_source() -> str:
    """A GET interface using path, query, header, sync and async slots."""
    return PHOTO_SOURCE


@pytest.fixture
def upload_source() -> str:
    """A POST_FORM interface with form fields and a multipart part."""
    return UPLOAD_SOURCE


@pytest.fixture
def photo_unit(photo_source: str) -> SourceUnit:
    """Declaration tree of :data:`PHOTO_SOURCE`."""
    from annorest.parser import parse_source

    return parse_source(photo_source, package_name="photos.api", filename="api.py")


@pytest.fixture
def photo_result(photo_unit: SourceUnit) -> ParseResult:
    """Walked :data:`PHOTO_SOURCE`."""
    from annorest.parser import walk

    return walk(photo_unit)


@pytest.fixture
def source_file(tmp_path: Path, photo_source: str) -> Path:
    """:data:`PHOTO_SOURCE` written to ``tmp_path/api.py``."""
    path = tmp_path / "api.py"
    path.write_text(photo_source, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from *tmp_path* with no ANNOREST_* variables set.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["ANNOREST_PKG", "ANNOREST_OUTPUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Set up a quiet output manager for tests that don't care about output.

    Installs a PLAIN-format, quiet OutputManager as the global output
    and resets it after the test completes.
    """
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a plain, verbose OutputManager so debug messages are printed."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
