"""Tests for annorest.generator.codegen."""

from __future__ import annotations

import ast
import textwrap

import pytest

from annorest.exceptions import GenerationError
from annorest.generator import generate
from annorest.generator.codegen import build_context, create_environment, is_async_ready
from annorest.models import MethodSpec, ParseResult, RequestSpec
from annorest.output import OutputManager
from annorest.parser import parse_source, walk


def _generate(source: str, package_name: str = "pkg", **kwargs) -> str:  # noqa: ANN003
    return generate(walk(parse_source(source, package_name=package_name)), **kwargs)


# ---------------------------------------------------------------------------
# Module structure
# ---------------------------------------------------------------------------


class TestGenerateModule:
    """Test the overall shape of the generated module."""

    def test_output_is_valid_python(self, photo_result: ParseResult) -> None:
        ast.parse(generate(photo_result))

    def test_banner(self, photo_result: ParseResult) -> None:
        source = generate(photo_result, filename="photos/api.py")
        assert source.startswith('"""Request builders generated from photos/api.py.')
        assert "SHOULD NOT BE EDITED" in source

    def test_no_banner(self, photo_result: ParseResult) -> None:
        source = generate(photo_result, banner=False)
        assert source.startswith("from __future__ import annotations")

    def test_imports_request_and_response_types(self, photo_result: ParseResult) -> None:
        source = generate(photo_result)
        assert "from photos.api import PhotoRequest, PhotoResponse\n" in source
        assert "from annorest.runtime import RestClient, debug_request, debug_response\n" in source
        assert "import threading\n" in source
        assert "import re\n" in source
        assert "from typing import Any, Optional, Protocol\n" in source

    def test_builder_class_and_constructor(self, photo_result: ParseResult) -> None:
        source = generate(photo_result)
        assert "class PhotoRequestImpl:" in source
        assert "def new_photo_request(rest_client: RestClient) -> PhotoRequest:" in source
        assert "return PhotoRequestImpl(rest_client)" in source

    def test_one_setter_per_categorised_method(self, photo_result: ParseResult) -> None:
        source = generate(photo_result)
        assert "def photo_id(self, id: str) -> PhotoRequest:" in source
        assert 'self._path_substitutions["id"] = id' in source
        assert "def image_size(self, size: int) -> PhotoRequest:" in source
        assert 'self._query_params.append(("image_size", str(size)))' in source
        assert 'self._header_params["X-Trace"] = value' in source

    def test_callback_protocol(self, photo_result: ParseResult) -> None:
        source = generate(photo_result)
        assert "class PhotoCallback(Protocol):" in source
        assert "def on_success(self, response: PhotoResponse) -> None: ..." in source
        assert "def photo_async(self, callback: PhotoCallback) -> None:" in source

    def test_endpoint_is_quoted_literal(self, photo_result: ParseResult) -> None:
        assert '"/photos/{id}"' in generate(photo_result)

    def test_form_and_multipart_setters(self, upload_source: str) -> None:
        source = _generate(upload_source)
        assert 'self._post_form_params.append(("rating", str(rating)))' in source
        assert 'self._post_form_params.append(("title", title))' in source
        assert 'self._post_multipart_params["image"] = data' in source
        assert 'http_method = "POST"' in source

    def test_multiple_interfaces(self) -> None:
        source = _generate(
            textwrap.dedent(
                """
                # @GET("/a")
                class A(Protocol):
                    # @SYNC("AResponse")
                    def run(self): ...

                # @DELETE("/b")
                class B(Protocol):
                    # @SYNC("AResponse")
                    def run(self): ...
                """
            )
        )
        assert "class AImpl:" in source
        assert "class BImpl:" in source
        assert "from pkg import A, AResponse, B\n" in source


# ---------------------------------------------------------------------------
# Sync / async gating
# ---------------------------------------------------------------------------


class TestResponseWrappers:
    """Test emission of the execution wrappers."""

    def test_no_sync_means_no_wrapper(self) -> None:
        source = _generate('# @GET("/a")\nclass A(Protocol):\n    pass\n')
        assert "def _build(self)" in source
        assert "send(" not in source
        assert "debug_request" not in source
        assert "from typing import Any\n" in source
        assert "from pkg import A\n" in source

    def test_async_without_sync_is_skipped_with_warning(
        self, verbose_output: OutputManager, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = _generate(
            textwrap.dedent(
                """
                # @GET("/a")
                class A(Protocol):
                    # @ASYNC("ACallback")
                    def go(self, callback: ACallback) -> None: ...
                """
            )
        )
        assert "def go(" not in source
        assert "import threading" not in source
        assert "requires a @SYNC method" in capsys.readouterr().err

    def test_is_async_ready(self, photo_result: ParseResult) -> None:
        spec = photo_result.requests[0]
        assert is_async_ready(spec)
        assert not is_async_ready(spec.model_copy(update={"sync_response": None}))
        assert not is_async_ready(spec.model_copy(update={"async_response": None}))


# ---------------------------------------------------------------------------
# Edge cases and errors
# ---------------------------------------------------------------------------


class TestGenerateEdgeCases:
    def test_empty_result_generates_nothing(self) -> None:
        assert generate(ParseResult(package_name="pkg")) == ""

    def test_is_idempotent(self, photo_result: ParseResult) -> None:
        assert generate(photo_result) == generate(photo_result)

    def test_setter_without_parameters_raises(self) -> None:
        with pytest.raises(GenerationError, match="'broken'"):
            _generate(
                textwrap.dedent(
                    """
                    # @GET("/a")
                    class A(Protocol):
                        # @QUERY("q")
                        def broken(self) -> A: ...
                    """
                )
            )

    def test_post_params_render_raw_setter(self, photo_result: ParseResult) -> None:
        spec = photo_result.requests[0].model_copy(deep=True)
        spec.post_params["body"] = MethodSpec.model_validate(
            {"name": "body", "parameters": [{"name": "payload", "type": "dict"}]}
        )
        source = generate(ParseResult(package_name="photos.api", requests=[spec]))
        assert "def body(self, payload: dict) -> PhotoRequest:" in source
        assert "self._post_body = payload" in source

    def test_duplicate_callbacks_emitted_once(self, photo_result: ParseResult) -> None:
        spec = photo_result.requests[0]
        other = spec.model_copy(update={"request_type": "OtherRequest"})
        context = build_context(
            ParseResult(package_name="photos.api", requests=[spec, other]), "x.py", True
        )
        assert context["callbacks"] == [
            {"name": "PhotoCallback", "response_type": "PhotoResponse"}
        ]
        assert context["package_imports"] == ["OtherRequest", "PhotoRequest", "PhotoResponse"]

    def test_environment_is_strict(self) -> None:
        env = create_environment()
        assert "snake_case" in env.filters
        assert "async_ready" in env.tests

    def test_debug_summary(
        self,
        photo_result: ParseResult,
        verbose_output: OutputManager,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        generate(photo_result)
        assert "Generated 1 builder(s)" in capsys.readouterr().err


class TestRequestSpecValidation:
    def test_sync_requires_response_type(self) -> None:
        with pytest.raises(ValueError, match="response_type"):
            RequestSpec(
                package_name="pkg",
                request_type="A",
                api_endpoint="/a",
                http_method="GET",
                sync_response=MethodSpec(name="run"),
            )

    def test_async_requires_callback_type(self) -> None:
        with pytest.raises(ValueError, match="callback_type"):
            RequestSpec(
                package_name="pkg",
                request_type="A",
                api_endpoint="/a",
                http_method="GET",
                async_response=MethodSpec(name="go"),
            )
