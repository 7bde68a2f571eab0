"""Tests for ResponseRenderer — diagnostics on err, generated text on out."""

import io

import pytest

from conftest import make_result
from shill.dispatcher import dry_run_result
from shill.errors import StreamError
from shill.models import Choice, CompletionRequest, CompletionResult
from shill.renderer import ResponseRenderer, cut_at_marker

REQUEST = CompletionRequest(engine="davinci-002", prompt="def add(a, b):", temperature=0.5, max_tokens=105)


def _render(request, result):
    out, err = io.StringIO(), io.StringIO()
    ResponseRenderer(out, err).render(request, result)
    return out.getvalue(), err.getvalue()


class _BrokenStream(io.StringIO):
    def write(self, s):
        raise BrokenPipeError(32, "Broken pipe")


class TestDiagnostics:
    def test_request_block(self):
        _, err = _render(REQUEST, make_result(" return a + b"))
        assert "\nrequest\n  - engine: davinci-002\n  - temperature: 0.5\n  - max_tokens: 105\n" in err

    def test_response_block(self):
        _, err = _render(REQUEST, make_result(" x", " y", id="cmpl-42"))
        assert "response cmpl-42" in err
        assert "  - model: davinci-002" in err
        assert "  - object: text_completion" in err
        assert "  - created: 1700000000" in err
        assert "  - choices: 2" in err

    def test_request_before_response(self):
        _, err = _render(REQUEST, make_result(" x"))
        assert err.index("request") < err.index("response") < err.index("choice 0")

    def test_logprobs_only_when_present(self):
        _, err = _render(REQUEST, make_result(" x"))
        assert "finish_reason: stop" in err
        assert "logprobs" not in err

        _, err = _render(REQUEST, make_result(" x", logprobs={"tokens": [" x"]}))
        assert "  - logprobs: {'tokens': [' x']}" in err

    def test_choices_in_index_order(self):
        result = CompletionResult(
            id="c", model="m", object="text_completion", created=0,
            choices=(
                Choice(index=1, text="second", finish_reason="length"),
                Choice(index=0, text="first", finish_reason="stop"),
            ),
        )
        out, err = _render(REQUEST, result)
        assert err.index("choice 0") < err.index("choice 1")
        assert out.index("first") < out.index("second")

    def test_text_not_written_to_err(self):
        _, err = _render(REQUEST, make_result(" return a + b"))
        assert "return a + b" not in err


class TestOutput:
    def test_prompt_and_text_concatenated(self):
        out, _ = _render(REQUEST, make_result(" return a + b"))
        assert out == "\ndef add(a, b): return a + b\n"

    def test_one_block_per_choice(self):
        out, _ = _render(REQUEST, make_result(" 1", " 2"))
        assert out == "\ndef add(a, b): 1\n\ndef add(a, b): 2\n"

    def test_dry_run_result(self):
        out, err = _render(REQUEST, dry_run_result(created=1))
        assert "(this was a dry run)" in out
        assert "response <none>" in err

    def test_stop_marker_cuts_text(self):
        request = CompletionRequest(engine="e", prompt="cd ..\n\nls", temperature=0.2, max_tokens=10, stop="\n\n")
        out, _ = _render(request, make_result("  ls -la  \n\necho extra"))
        assert out == "ls -la\n"

    def test_stop_marker_absent_keeps_whole_text(self):
        request = CompletionRequest(engine="e", prompt="p", temperature=0.2, max_tokens=10, stop="###")
        out, _ = _render(request, make_result(" all of it "))
        assert out == "all of it\n"

    @pytest.mark.parametrize("text,marker,expected", [
        ("a###b", "###", "a"),
        ("  a  ", "###", "a"),
        ("###b", "###", ""),
        ("a\n\nb\n\nc", "\n\n", "a"),
    ])
    def test_cut_at_marker(self, text, marker, expected):
        assert cut_at_marker(text, marker) == expected


class TestStreamFailures:
    def test_err_write_failure_raises_stream_error(self):
        renderer = ResponseRenderer(io.StringIO(), _BrokenStream())
        with pytest.raises(StreamError):
            renderer.render_request(REQUEST)

    def test_out_write_failure_raises_stream_error(self):
        renderer = ResponseRenderer(_BrokenStream(), io.StringIO())
        with pytest.raises(StreamError) as exc:
            renderer.render(REQUEST, make_result(" x"))
        assert isinstance(exc.value.__cause__, BrokenPipeError)
