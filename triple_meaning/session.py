"""One player's quiz: the question sequence and where they are in it."""
from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from triple_meaning.answers import GuessResult, reveal_answer, submit_guess
from triple_meaning.catalog import tracks_for_albums
from triple_meaning.excerpt import EXCERPT_SECONDS
from triple_meaning.models import Catalog, QuizQuestion
from triple_meaning.question_generator import (
    DEFAULT_QUESTION_COUNT,
    ValidationError,
    generate_questions,
)
from triple_meaning.scoring import FinalScore, Progress, final_score, progress

_log = logging.getLogger("triple_meaning.session")


class EmptySelection(ValidationError):
    """No albums were selected."""


class QuestionNotComplete(RuntimeError):
    """Tried to move on before the current question was answered or revealed."""


@dataclass
class QuizSession:
    questions: list[QuizQuestion]
    album_ids: list[str] = field(default_factory=list)
    excerpt_duration: int = EXCERPT_SECONDS
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    current_index: int = 0
    finished: bool = False
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def start(
        cls,
        catalog: Catalog,
        album_ids: list[str],
        question_count: int = DEFAULT_QUESTION_COUNT,
        rng: random.Random | None = None,
        excerpt_duration: int = EXCERPT_SECONDS,
    ) -> QuizSession:
        if not album_ids:
            raise EmptySelection("No albums selected")
        tracks = tracks_for_albums(catalog, album_ids)
        questions = generate_questions(tracks, question_count, rng, excerpt_duration)
        session = cls(
            questions=questions,
            album_ids=list(album_ids),
            excerpt_duration=excerpt_duration,
        )
        _log.info("Session %s started: %d albums, %d tracks, %d questions",
                  session.id, len(album_ids), len(tracks), len(questions))
        return session

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.current_index]

    def guess(self, track_id: str, slot: int | None = None) -> GuessResult:
        result = submit_guess(self.current, track_id, slot)
        self.questions[self.current_index] = result.question
        _log.debug("Session %s Q%d: guess %s -> %s",
                   self.id, self.current.question_number, track_id, result.outcome)
        return result

    def reveal(self) -> QuizQuestion:
        self.questions[self.current_index] = reveal_answer(self.current)
        return self.current

    def advance(self) -> bool:
        """Move to the next question.

        Returns False (and marks the session finished) when the current
        question was the last one.
        """
        if not self.current.is_complete:
            raise QuestionNotComplete(
                f"question {self.current.question_number} is not answered or revealed"
            )
        if self.current_index >= len(self.questions) - 1:
            if not self.finished:
                self.finished = True
                _log.info("Session %s finished: %s", self.id, self.final_score())
            return False
        self.current_index += 1
        return True

    def progress(self) -> Progress:
        return progress(self.questions, self.current_index)

    def final_score(self) -> FinalScore:
        return final_score(self.questions)

    def playback(self) -> list[dict]:
        """What the player needs for the current question: one entry per track."""
        q = self.current
        return [
            {
                "video_id": track.video_id,
                "start": start,
                "end": start + self.excerpt_duration,
            }
            for track, start in zip(q.tracks, q.start_times)
        ]
