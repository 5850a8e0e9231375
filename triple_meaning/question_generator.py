"""Build the question sequence for one quiz session."""
from __future__ import annotations

import logging
import random

from triple_meaning.excerpt import EXCERPT_SECONDS, start_time
from triple_meaning.models import QuizQuestion, Track
from triple_meaning.sampling import sample_without_replacement

_log = logging.getLogger("triple_meaning.qgen")

TRACKS_PER_QUESTION = 3
DEFAULT_QUESTION_COUNT = 5


class ValidationError(ValueError):
    """The inputs cannot produce a quiz (e.g. fewer than three tracks)."""


def _pick_tracks(
    tracks: list[Track],
    used: set[str],
    rng: random.Random | None,
) -> tuple[list[Track], set[str]]:
    """Pick one question's tracks and return them with the updated used-set.

    Once fewer than three unused tracks remain the used-set is cleared and the
    whole pool becomes available again, so a track picked just before the
    reset can come straight back.
    """
    available = [t for t in tracks if t.id not in used]
    if len(available) < TRACKS_PER_QUESTION:
        used = set()
        available = list(tracks)
    picked = sample_without_replacement(available, TRACKS_PER_QUESTION, rng)
    return picked, used | {t.id for t in picked}


def generate_questions(
    tracks: list[Track],
    question_count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
    excerpt_duration: int = EXCERPT_SECONDS,
) -> list[QuizQuestion]:
    """Generate *question_count* questions of three distinct tracks each.

    Tracks are not repeated until the pool runs dry. Start times are fixed
    here so every replay of a question plays the same excerpts.

    Raises ValidationError when fewer than three tracks are given.
    """
    if len(tracks) < TRACKS_PER_QUESTION:
        raise ValidationError(
            f"insufficient tracks: need at least {TRACKS_PER_QUESTION}, got {len(tracks)}"
        )

    questions: list[QuizQuestion] = []
    used: set[str] = set()
    for i in range(question_count):
        picked, used = _pick_tracks(tracks, used, rng)
        questions.append(QuizQuestion(
            question_number=i + 1,
            tracks=picked,
            start_times=[start_time(t, excerpt_duration, rng) for t in picked],
        ))

    _log.info("Generated %d questions from a pool of %d tracks", len(questions), len(tracks))
    return questions
