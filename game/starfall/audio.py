"""
Audio hooks called by the simulation at its four sound events.

The base class is silent. Backends override the methods they can play;
the simulation never sees their failures.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class AudioHooks:
    """No-op audio collaborator"""

    def shot(self) -> None:
        pass

    def enemy_destroyed(self) -> None:
        pass

    def power_up(self) -> None:
        pass

    def player_hit(self) -> None:
        pass


def safe_trigger(hook: Callable[[], None]) -> None:
    """Fire an audio hook, ignoring any backend failure"""
    try:
        hook()
    except Exception as exc:
        logger.debug("Audio hook %s failed: %s", getattr(hook, "__name__", hook), exc)
