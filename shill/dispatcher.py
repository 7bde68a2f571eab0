"""Request construction and dispatch.

``build_request()`` applies the preset template and computes the token
budget.  ``dispatch()`` then either fabricates a placeholder result (dry
run, no provider is ever created) or sends exactly one request to the
completion provider.  Provider errors propagate untouched.
"""

from __future__ import annotations

import logging
import time
from functools import partial
from typing import Callable

from .llm.providers import load_provider
from .llm.providers.base import CompletionProvider
from .models import Choice, CompletionRequest, CompletionResult
from .options import Options
from .settings import Settings
from .tokens import count_tokens, token_budget

logger = logging.getLogger(__name__)

DRY_RUN_PLACEHOLDER = "<none>"
DRY_RUN_TEXT = "\n(this was a dry run)"


def default_provider_factory(options: Options, settings: Settings | None = None) -> CompletionProvider:
    return load_provider(options.api_key, settings)


def dry_run_result(created: int) -> CompletionResult:
    """Synthetic result returned instead of calling the provider."""
    return CompletionResult(
        id=DRY_RUN_PLACEHOLDER,
        model=DRY_RUN_PLACEHOLDER,
        object=DRY_RUN_PLACEHOLDER,
        created=created,
        choices=(
            Choice(
                index=0,
                text=DRY_RUN_TEXT,
                finish_reason=DRY_RUN_PLACEHOLDER,
                logprobs=None,
            ),
        ),
    )


class RequestDispatcher:
    def __init__(
        self,
        provider_factory: Callable[[Options], CompletionProvider] | None = None,
        count: Callable[[str], int] | None = None,
        clock: Callable[[], float] = time.time,
        *,
        settings: Settings | None = None,
    ):
        # None → the provider named by settings.LLM_PROVIDER
        self._provider_factory = provider_factory or partial(default_provider_factory, settings=settings)
        # None → tiktoken, with the encoding picked per engine
        self._count = count
        self._clock = clock

    def build_request(self, options: Options) -> CompletionRequest:
        prompt = options.template(options.prompt)
        count = self._count or partial(count_tokens, engine=options.engine)
        return CompletionRequest(
            engine=options.engine,
            prompt=prompt,
            temperature=options.temperature,
            max_tokens=token_budget(prompt, options.tokens, count=count),
            stop=options.stop,
        )

    def dispatch(
        self,
        options: Options,
        request: CompletionRequest | None = None,
    ) -> CompletionResult:
        if options.dry_run:
            logger.info("Dry run, no request sent")
            return dry_run_result(created=round(self._clock()))

        if request is None:
            request = self.build_request(options)
        provider = self._provider_factory(options)
        logger.info(
            "Sending completion request to %s (engine=%s, max_tokens=%d)",
            provider.name, request.engine, request.max_tokens,
        )
        return provider.complete(request)
