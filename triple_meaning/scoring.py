"""Progress and final-score statistics for a question sequence."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from triple_meaning.models import QuizQuestion
from triple_meaning.question_generator import TRACKS_PER_QUESTION

# (threshold, rating, message, colour), highest first
RATING_TIERS = [
    (90, "excellent", "Outstanding result!", "#10b981"),
    (70, "good", "Well done!", "#3b82f6"),
    (50, "fair", "Almost there, keep going!", "#f59e0b"),
    (0, "keep_trying", "Better luck next time!", "#ef4444"),
]


def round_half_up(x: float) -> int:
    # round() rounds halves to even; scores shown in the browser round 0.5 up
    return math.floor(x + 0.5)


@dataclass
class Progress:
    total_questions: int
    completed_questions: int
    current_question: int
    progress_percentage: int
    is_last_question: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FinalScore:
    total_correct: int
    total_possible: int
    percentage: int
    perfect_questions: int

    def to_dict(self) -> dict:
        return asdict(self)


def progress(questions: list[QuizQuestion], current_index: int) -> Progress:
    total = len(questions)
    if total == 0:
        raise ValueError("cannot compute progress of an empty question sequence")
    return Progress(
        total_questions=total,
        completed_questions=current_index,
        current_question=current_index + 1,
        progress_percentage=round_half_up(current_index / total * 100),
        is_last_question=current_index == total - 1,
    )


def final_score(questions: list[QuizQuestion]) -> FinalScore:
    total_correct = sum(len(q.correct_answers) for q in questions)
    total_possible = TRACKS_PER_QUESTION * len(questions)
    percentage = round_half_up(total_correct / total_possible * 100) if total_possible > 0 else 0
    return FinalScore(
        total_correct=total_correct,
        total_possible=total_possible,
        percentage=percentage,
        perfect_questions=sum(1 for q in questions if len(q.correct_answers) == TRACKS_PER_QUESTION),
    )


def performance_rating(percentage: int) -> dict:
    """Map a score percentage to the rating shown on the result screen."""
    for threshold, rating, message, colour in RATING_TIERS:
        if percentage >= threshold:
            return {"rating": rating, "message": message, "color": colour}
    _, rating, message, colour = RATING_TIERS[-1]
    return {"rating": rating, "message": message, "color": colour}
