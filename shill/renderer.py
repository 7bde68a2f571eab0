"""Response rendering — diagnostics to one stream, generated text to another.

Diagnostics (request parameters, response metadata, per-choice finish
reasons) go to ``err``; the prompt and generated text go to ``out`` so
shell pipelines only see the completion.

Layout of the diagnostic stream::

    request
      - engine: davinci-002
      - temperature: 0.5
      - max_tokens: 105

    response cmpl-123
      - model: davinci-002
      ...
"""

from __future__ import annotations

from typing import Any, Mapping, TextIO

from .errors import StreamError
from .models import CompletionRequest, CompletionResult


def cut_at_marker(text: str, marker: str) -> str:
    """Text before the first *marker*, trimmed."""
    return text.split(marker, 1)[0].strip()


class ResponseRenderer:
    def __init__(self, out: TextIO, err: TextIO):
        self._out = out
        self._err = err

    def render(self, request: CompletionRequest, result: CompletionResult) -> None:
        self.render_request(request)
        self.render_result(request, result)

    def render_request(self, request: CompletionRequest) -> None:
        self._block("request", {
            "engine": request.engine,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        })

    def render_result(self, request: CompletionRequest, result: CompletionResult) -> None:
        self._block(f"response {result.id}", {
            "model": result.model,
            "object": result.object,
            "created": result.created,
            "choices": len(result.choices),
        })

        choices = sorted(result.choices, key=lambda c: c.index)
        for choice in choices:
            props: dict[str, Any] = {"finish_reason": choice.finish_reason}
            if choice.logprobs is not None:
                props["logprobs"] = choice.logprobs
            self._block(f"choice {choice.index}", props)

        for choice in choices:
            if request.stop:
                self._write(self._out, cut_at_marker(choice.text, request.stop) + "\n")
            else:
                self._write(self._out, "\n" + request.prompt + choice.text + "\n")
        self._flush(self._out)

    def _block(self, title: str, props: Mapping[str, Any]) -> None:
        lines = ["", title]
        lines.extend(f"  - {key}: {value}" for key, value in props.items())
        self._write(self._err, "\n".join(lines) + "\n")

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        try:
            stream.write(text)
        except OSError as e:
            raise StreamError(f"Could not write output: {e}") from e

    @staticmethod
    def _flush(stream: TextIO) -> None:
        try:
            stream.flush()
        except OSError as e:
            raise StreamError(f"Could not write output: {e}") from e
