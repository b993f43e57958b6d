"""
Timed effects on ghosts.

Only absolute expiry timestamps are stored; every query is a pure function
of the caller's "now", so dropped or slow frames cannot make a window drift.
"""

from typing import Iterable

from .entities import EXPIRED, Ghost


def is_vulnerable(ghost: Ghost, now: float) -> bool:
    return now < ghost.vulnerable_until


def is_hidden(ghost: Ghost, now: float) -> bool:
    return now < ghost.hidden_until


def make_vulnerable(ghosts: Iterable[Ghost], now: float, duration: float) -> float:
    """Open a shared vulnerability window, returns its expiry"""
    until = now + duration
    for g in ghosts:
        g.vulnerable_until = until
    return until


def hide(ghost: Ghost, now: float, duration: float) -> float:
    ghost.hidden_until = now + duration
    return ghost.hidden_until


def clear_effects(ghost: Ghost) -> None:
    ghost.vulnerable_until = EXPIRED
    ghost.hidden_until = EXPIRED
