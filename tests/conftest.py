"""Shared test fixtures."""
from __future__ import annotations

import pytest

from triple_meaning.models import Catalog, QuizQuestion, Track


class FakeRandom:
    """Scripted stand-in for ``random.Random``.

    Returns the given values in order and repeats the last one once they run
    out.
    """

    def __init__(self, *values: float):
        self._values = list(values) or [0.0]
        self._call_count = 0

    def random(self) -> float:
        idx = min(self._call_count, len(self._values) - 1)
        self._call_count += 1
        return self._values[idx]

    @property
    def call_count(self):
        return self._call_count


@pytest.fixture
def catalog_dict():
    """Raw songs.json content."""
    return {
        "artists": [
            {
                "id": "artist001",
                "name": "Test Artist 1",
                "albums": [
                    {
                        "id": "album001",
                        "name": "Test Album 1",
                        "jacketUrl": "/jackets/album001.jpg",
                        "tracks": [
                            {"id": "track001", "title": "Track 1",
                             "youtubeUrl": "https://www.youtube.com/watch?v=aaaaaaaaaa1", "duration": 228},
                            {"id": "track002", "title": "Track 2",
                             "youtubeUrl": "https://www.youtube.com/watch?v=aaaaaaaaaa2", "duration": 62},
                            {"id": "track003", "title": "Track 3",
                             "youtubeUrl": "https://youtu.be/aaaaaaaaaa3"},
                        ],
                    },
                    {
                        "id": "album002",
                        "name": "Test Album 2",
                        "jacketUrl": "/jackets/album002.jpg",
                        "tracks": [
                            {"id": "track004", "title": "Track 4",
                             "youtubeUrl": "https://www.youtube.com/watch?v=aaaaaaaaaa4", "duration": 120},
                            {"id": "track005", "title": "Track 5",
                             "youtubeUrl": "https://www.youtube.com/watch?v=aaaaaaaaaa5"},
                        ],
                    },
                ],
            },
            {
                "id": "artist002",
                "name": "Test Artist 2",
                "albums": [
                    {
                        "id": "album003",
                        "name": "Test Album 3",
                        "jacketUrl": "/jackets/album003.jpg",
                        "tracks": [
                            {"id": "track006", "title": "Track 6",
                             "youtubeUrl": "https://www.youtube.com/watch?v=aaaaaaaaaa6", "duration": 8},
                        ],
                    },
                ],
            },
        ]
    }


@pytest.fixture
def sample_catalog(catalog_dict):
    return Catalog.from_dict(catalog_dict)


@pytest.fixture
def sample_tracks():
    """Five tracks without durations."""
    return [
        Track(f"track00{i}", f"Track {i}", f"https://www.youtube.com/watch?v=vid{i}")
        for i in range(1, 6)
    ]


@pytest.fixture
def sample_question():
    """A fresh, unanswered question."""
    return QuizQuestion(
        question_number=1,
        tracks=[
            Track("track001", "Track 1", "https://youtu.be/vid1", 228),
            Track("track002", "Track 2", "https://youtu.be/vid2", 62),
            Track("track003", "Track 3", "https://youtu.be/vid3"),
        ],
        start_times=[85, 31, 120],
    )


def make_question(number: int, correct: list[str], revealed: bool = False) -> QuizQuestion:
    return QuizQuestion(
        question_number=number,
        tracks=[Track(f"t{number}{i}", f"T{i}", "") for i in range(3)],
        start_times=[90, 95, 100],
        correct_answers=list(correct),
        is_answer_revealed=revealed,
    )


@pytest.fixture
def question_factory():
    return make_question
