"""URL sync - keeps the shareable address in step with the pattern

On startup the address is checked once for a ``pattern`` parameter.
After that check, every pattern change re-encodes the pattern into the
address, debounced so a burst of edits produces one rewrite.
"""

from __future__ import annotations

import asyncio
import logging

from padseq_core.codec import decode_pattern, encode_pattern, get_pattern_param, with_pattern_param
from padseq_core.editing import PatternStore
from padseq_core.ir import DrumPattern
from padseq_core.result import CommandResult

logger = logging.getLogger(__name__)

INVALID_PATTERN_URL = "Invalid pattern URL"


class UrlSync:
    """Address-bar state for the pattern being edited."""

    DEFAULT_DEBOUNCE: float = 0.5

    def __init__(
        self,
        store: PatternStore,
        address: str,
        debounce: float = DEFAULT_DEBOUNCE,
    ) -> None:
        self._store = store
        self.address = address
        self.debounce = debounce
        self.url_check_complete = False
        self._timer: asyncio.TimerHandle | None = None
        self._unsubscribe = store.subscribe(self._on_pattern_changed)

    @property
    def pending(self) -> bool:
        """True while a debounced rewrite is waiting."""
        return self._timer is not None

    def load_from_url(self, url: str | None = None) -> CommandResult:
        """
        Load the pattern carried by an address, if any.

        On success the pattern replaces the current one and the parameter
        is removed from the address (other parameters are kept). On failure
        the address is left untouched.
        """
        url = url if url is not None else self.address
        encoded = get_pattern_param(url)
        if not encoded:
            self.url_check_complete = True
            return CommandResult.ignored("No pattern in URL")

        pattern = decode_pattern(encoded)
        if pattern is None:
            self.url_check_complete = True
            logger.warning("Failed to load pattern from URL")
            return CommandResult.error(INVALID_PATTERN_URL)

        self._store.set_pattern(pattern)
        self.address = with_pattern_param(url, None)
        self.url_check_complete = True
        logger.info(f"Loaded shared pattern {pattern.name!r}")
        return CommandResult.ok(
            "Pattern loaded from URL", {"id": pattern.id, "address": self.address}
        )

    def _on_pattern_changed(self, pattern: DrumPattern | None) -> None:
        if not self.url_check_complete:
            return
        self._schedule()

    def _schedule(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop (e.g. CLI use): nothing to debounce against
            self.flush()
            return
        self._timer = loop.call_later(self.debounce, self.flush)

    def flush(self) -> str:
        """Rewrite the address from the current pattern now."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        pattern = self._store.current
        if pattern is None:
            self.address = with_pattern_param(self.address, None)
            return self.address

        encoded = encode_pattern(pattern)
        if encoded is None:
            logger.warning("Pattern too large for the address; keeping previous address")
            return self.address
        self.address = with_pattern_param(self.address, encoded)
        logger.debug(f"Address updated ({len(encoded)} chars)")
        return self.address

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._unsubscribe()
