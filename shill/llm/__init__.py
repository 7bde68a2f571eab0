"""Completion provider adapters.

For new code, import from submodules directly::

    from shill.llm.providers import load_provider
    from shill.llm.providers.base import CompletionProvider
"""

from .providers import load_provider
from .providers.base import CompletionProvider

__all__ = [
    "CompletionProvider",
    "load_provider",
]
