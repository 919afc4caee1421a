from __future__ import annotations

import threading
from typing import Dict, Mapping, Optional, Set

from ..config import DEFAULT_TOKENS, TOKEN_NAMES


STATE_DEFAULT = "default"
STATE_APPLIED = "applied"


class StyleRegistry:
    """Process-wide table of style tokens read by the rendering layer.

    Every write swaps the whole table under one lock, so readers never see a
    mix of two palettes. Generations are handed out by ``next_generation``;
    a write tagged with an older generation than the newest live one is
    refused when ``discard_stale`` is set. Generations given up through
    ``abandon`` (failed extractions) no longer count as newer.
    """

    def __init__(self, defaults: Mapping[str, str] = DEFAULT_TOKENS) -> None:
        self._defaults: Dict[str, str] = _validated(defaults)
        self._lock = threading.Lock()
        self._tokens: Dict[str, str] = dict(self._defaults)
        self._state = STATE_DEFAULT
        self._issued = 0
        self._generation = 0
        self._abandoned: Set[int] = set()

    def next_generation(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._tokens)

    def get(self, name: str) -> Optional[str]:
        with self._lock:
            return self._tokens.get(name)

    @property
    def state(self) -> str:
        with self._lock:
            return self._state

    @property
    def generation(self) -> int:
        """Generation of the write currently visible in the table."""
        with self._lock:
            return self._generation

    @property
    def latest_generation(self) -> int:
        """Newest issued generation that has not been abandoned."""
        with self._lock:
            return self._live_latest()

    def abandon(self, generation: int) -> None:
        with self._lock:
            self._abandoned.add(generation)

    def _live_latest(self) -> int:
        latest = self._issued
        while latest in self._abandoned:
            latest -= 1
        return latest

    def _settle(self, generation: int) -> None:
        self._generation = generation
        self._abandoned = {g for g in self._abandoned if g > generation}

    def replace(
        self,
        tokens: Mapping[str, str],
        generation: Optional[int] = None,
        discard_stale: bool = True,
    ) -> bool:
        table = _validated(tokens)
        with self._lock:
            if generation is not None and discard_stale and generation < self._live_latest():
                return False
            self._tokens = table
            self._state = STATE_APPLIED
            self._settle(self._issued if generation is None else generation)
            return True

    def reset(self, generation: Optional[int] = None) -> None:
        with self._lock:
            self._tokens = dict(self._defaults)
            self._state = STATE_DEFAULT
            self._settle(self._issued if generation is None else generation)


def _validated(tokens: Mapping[str, str]) -> Dict[str, str]:
    missing = [name for name in TOKEN_NAMES if not tokens.get(name)]
    unknown = sorted(set(tokens) - set(TOKEN_NAMES))
    if missing or unknown:
        raise ValueError(f"Token table mismatch: missing={missing} unknown={unknown}")
    return {name: tokens[name] for name in TOKEN_NAMES}


REGISTRY = StyleRegistry()
