"""Functional options and cooperative cancellation."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from epub_reader.core.errors import DeadlineExceededError, EpubCancelledError

if TYPE_CHECKING:
    from epub_reader.models.epub import Chapter


class CancellationToken:
    """Cancellation signal polled by long-running queries.

    The token is cancelled either explicitly through :meth:`cancel` (from any
    thread) or implicitly once its optional deadline has passed. Nothing is
    interrupted preemptively: callers only notice at their polling points.
    """

    def __init__(self, deadline: float | None = None):
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that fires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        self._event.set()

    def _deadline_passed(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self._deadline_passed()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise EpubCancelledError("operation cancelled")
        if self._deadline_passed():
            raise DeadlineExceededError("operation deadline exceeded")


@dataclass
class EpubOptions:
    """Per-call configuration for chapter queries."""

    cancellation: CancellationToken = field(default_factory=CancellationToken)
    include_cover: bool = False  # reserved
    include_metadata: bool = False  # reserved
    chapter_filter: Callable[["Chapter"], bool] | None = None
    max_content_length: int = 0  # 0 = unlimited

    def is_cancelled(self) -> bool:
        return self.cancellation.cancelled

    def check_cancelled(self) -> None:
        self.cancellation.raise_if_cancelled()

    def exceeds_limit(self, size: int) -> bool:
        return self.max_content_length > 0 and size > self.max_content_length


Option = Callable[[EpubOptions], None]


def with_cancellation(token: CancellationToken | None) -> Option:
    """Poll ``token`` during the query. ``None`` keeps the default."""

    def apply(opts: EpubOptions) -> None:
        if token is not None:
            opts.cancellation = token

    return apply


def with_deadline(seconds: float) -> Option:
    """Cancel the query once ``seconds`` have elapsed."""

    def apply(opts: EpubOptions) -> None:
        opts.cancellation = CancellationToken.with_timeout(seconds)

    return apply


def with_cover() -> Option:
    def apply(opts: EpubOptions) -> None:
        opts.include_cover = True

    return apply


def with_metadata() -> Option:
    def apply(opts: EpubOptions) -> None:
        opts.include_metadata = True

    return apply


def with_chapter_filter(chapter_filter: Callable[["Chapter"], bool] | None) -> Option:
    """Keep only chapters for which ``chapter_filter`` returns True."""

    def apply(opts: EpubOptions) -> None:
        opts.chapter_filter = chapter_filter

    return apply


def with_max_content_length(max_length: int) -> Option:
    """Limit chapter content to ``max_length`` bytes (0 disables the limit)."""

    def apply(opts: EpubOptions) -> None:
        opts.max_content_length = max_length

    return apply


def apply_options(*opts: Option) -> EpubOptions:
    """Build default options and apply ``opts`` in order."""
    options = EpubOptions()
    for opt in opts:
        opt(options)
    return options
