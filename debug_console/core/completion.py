"""Prefix-based tab completion on top of the evaluation engine."""

import logging
import os
from typing import Iterable

from .output import LogSink, OutputStyle

LOGGER = logging.getLogger(__name__)


def common_prefix(candidates: Iterable[str]) -> str:
    """Return the longest string that prefixes every candidate (case-sensitive)."""
    return os.path.commonprefix(list(candidates))


class CompletionEngine:
    """Expands a partial line using completion candidates from the engine."""

    def __init__(self, engine, sink: LogSink):
        """Initialize the completion engine.

        Args:
            engine: Evaluation engine providing ``completions(prefix)``
            sink: Log sink that receives ambiguity listings
        """
        self.engine = engine
        self.sink = sink

    def expand(self, prefix: str) -> str:
        """Extend ``prefix`` by the part all completion candidates agree on.

        When the candidates share no leading text, they are listed as one
        info record and ``prefix`` is returned unchanged.
        """
        result = self.engine.completions(prefix)
        if result is None:
            return prefix

        candidates, token_prefix = result
        if not candidates:
            return prefix

        shared = common_prefix(candidates)
        if shared:
            return prefix + shared

        LOGGER.debug(f"Ambiguous completion for {prefix!r}: {len(candidates)} candidates")
        listing = "  ".join(token_prefix + candidate for candidate in sorted(candidates))
        self.sink.log(listing, OutputStyle.INFO)
        return prefix
