"""Choose where in a track the quiz excerpt starts.

Known durations use midpoint windowing: the start is drawn from a window of
+/-25% of the track length around its middle, which keeps excerpts away from
intros and fade-outs. Without a duration we fall back to a window that
usually lands in the first chorus or second verse of a pop song.
"""
from __future__ import annotations

import math
import random

from triple_meaning.models import Track
from triple_meaning.sampling import random_int

EXCERPT_SECONDS = 5

DEFAULT_WINDOW_START = 90
DEFAULT_WINDOW_END = 150
# Assumed length of a track whose duration we don't know
ASSUMED_TRACK_SECONDS = 180

MIDPOINT_SPREAD = 0.25


def default_start_time(excerpt_duration: int = EXCERPT_SECONDS, rng: random.Random | None = None) -> int:
    hi = min(DEFAULT_WINDOW_END, ASSUMED_TRACK_SECONDS - excerpt_duration)
    if hi <= DEFAULT_WINDOW_START:
        return DEFAULT_WINDOW_START
    return random_int(DEFAULT_WINDOW_START, hi, rng)


def midpoint_start_time(
    duration: int,
    excerpt_duration: int = EXCERPT_SECONDS,
    rng: random.Random | None = None,
) -> int:
    """Start offset centred on the middle of a track of known *duration*.

    Tracks no longer than the excerpt start at 0. When the window collapses
    the latest start that still fits the excerpt is used. Fractional
    durations are floored to whole seconds first.
    """
    duration = math.floor(duration)
    if duration <= excerpt_duration:
        return 0

    mid = math.floor(duration / 2)
    spread = math.floor(duration * MIDPOINT_SPREAD)
    lo = max(0, mid - spread)
    hi = min(duration - excerpt_duration, mid + spread)
    if lo >= hi:
        return max(0, duration - excerpt_duration)
    return random_int(lo, hi, rng)


def start_time(
    track: Track,
    excerpt_duration: int = EXCERPT_SECONDS,
    rng: random.Random | None = None,
) -> int:
    if track.duration is None or track.duration <= 0:
        return default_start_time(excerpt_duration, rng)
    return midpoint_start_time(track.duration, excerpt_duration, rng)
