"""Per-question answer state changes.

Questions are never mutated: every change returns a new ``QuizQuestion``
and the caller swaps it into its sequence.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from triple_meaning.models import QuizQuestion

CORRECT = "correct"
INCORRECT = "incorrect"
ALREADY_ANSWERED = "already_answered"


@dataclass
class GuessResult:
    outcome: str  # correct | incorrect | already_answered
    question: QuizQuestion

    @property
    def is_correct(self) -> bool:
        return self.outcome == CORRECT


def submit_guess(
    question: QuizQuestion,
    guessed_track_id: str,
    slot: int | None = None,
) -> GuessResult:
    """Check a guess against *question*.

    Without *slot* the guess counts if it names any of the three tracks. With
    a 0-based *slot* it must name the track playing in that position.
    """
    if slot is not None:
        if isinstance(slot, bool) or not isinstance(slot, int):
            raise ValueError(f"slot must be an integer: {slot!r}")
        if not 0 <= slot < len(question.tracks):
            raise ValueError(f"slot out of range: {slot}")
        hit = question.tracks[slot].id == guessed_track_id
    else:
        hit = guessed_track_id in question.track_ids

    if not hit:
        return GuessResult(INCORRECT, question)
    if guessed_track_id in question.correct_answers:
        return GuessResult(ALREADY_ANSWERED, question)
    updated = replace(question, correct_answers=[*question.correct_answers, guessed_track_id])
    return GuessResult(CORRECT, updated)


def reveal_answer(question: QuizQuestion) -> QuizQuestion:
    if question.is_answer_revealed:
        return question
    return replace(question, is_answer_revealed=True)


def is_complete(question: QuizQuestion) -> bool:
    """A question can be left once all three tracks are found or it was revealed."""
    return question.is_complete
