"""Tests for quiz question generation."""
from __future__ import annotations

import random

import pytest

from triple_meaning.models import Track
from triple_meaning.question_generator import ValidationError, generate_questions

from conftest import FakeRandom


class TestGenerateQuestions:
    def test_question_count(self, sample_tracks):
        assert len(generate_questions(sample_tracks, 3)) == 3

    def test_default_count_is_five(self, sample_tracks):
        assert len(generate_questions(sample_tracks)) == 5

    def test_three_distinct_tracks_each(self, sample_tracks):
        for q in generate_questions(sample_tracks, 10, random.Random(0)):
            assert len(q.tracks) == 3
            assert len(set(q.track_ids)) == 3

    def test_question_numbers(self, sample_tracks):
        result = generate_questions(sample_tracks, 3)
        assert [q.question_number for q in result] == [1, 2, 3]

    def test_initial_answer_state(self, sample_tracks):
        q = generate_questions(sample_tracks, 1)[0]
        assert q.correct_answers == []
        assert q.is_answer_revealed is False

    def test_insufficient_tracks(self, sample_tracks):
        with pytest.raises(ValidationError, match="insufficient tracks"):
            generate_questions(sample_tracks[:2], 1)

    def test_no_tracks(self):
        with pytest.raises(ValidationError):
            generate_questions([], 5)

    def test_validation_error_is_value_error(self, sample_tracks):
        with pytest.raises(ValueError):
            generate_questions(sample_tracks[:1])

    def test_zero_questions(self, sample_tracks):
        assert generate_questions(sample_tracks, 0) == []

    def test_exactly_three_tracks_every_question_has_all(self, sample_tracks):
        pool = sample_tracks[:3]
        result = generate_questions(pool, 7, random.Random(11))
        assert len(result) == 7
        for q in result:
            assert sorted(q.track_ids) == ["track001", "track002", "track003"]

    def test_no_repeats_until_pool_exhausted(self):
        tracks = [Track(f"t{i:02d}", f"T{i}", "") for i in range(9)]
        result = generate_questions(tracks, 3, random.Random(5))
        seen = [tid for q in result for tid in q.track_ids]
        assert len(seen) == 9
        assert len(set(seen)) == 9

    def test_pool_resets_after_exhaustion(self):
        # A 0.0 draw always picks the first three available tracks
        tracks = [Track(f"t{i}", f"T{i}", "") for i in range(1, 7)]
        result = generate_questions(tracks, 3, FakeRandom(0.0))
        assert result[0].track_ids == ["t1", "t2", "t3"]
        assert result[1].track_ids == ["t4", "t5", "t6"]
        assert result[2].track_ids == ["t1", "t2", "t3"]

    def test_partial_pool_resets_to_full_list(self, sample_tracks):
        # Two unused tracks left after the first question is not enough
        result = generate_questions(sample_tracks, 2, FakeRandom(0.0))
        assert result[0].track_ids == ["track001", "track002", "track003"]
        assert result[1].track_ids == ["track001", "track002", "track003"]

    def test_start_times_follow_track_positions(self):
        tracks = [
            Track("short", "Short", "", 3),
            Track("mid", "Mid", "", 120),
            Track("unknown", "Unknown", ""),
        ]
        q = generate_questions(tracks, 1, FakeRandom(0.0))[0]
        assert q.track_ids == ["short", "mid", "unknown"]
        # short -> 0, 120s -> window [30, 90] low end, unknown -> 90
        assert q.start_times == [0, 30, 90]

    def test_start_times_valid(self):
        tracks = [
            Track("track001", "T1", "", 120),
            Track("track002", "T2", "", 180),
            Track("track003", "T3", ""),
            Track("track004", "T4", "", 62),
            Track("track005", "T5", "", 228),
        ]
        for q in generate_questions(tracks, 5, random.Random(3)):
            assert len(q.start_times) == 3
            for track, start in zip(q.tracks, q.start_times):
                assert start >= 0
                if track.duration:
                    assert start <= track.duration - 5
                else:
                    assert 90 <= start <= 150

    def test_custom_excerpt_duration(self):
        tracks = [Track(f"t{i}", "T", "", 20) for i in range(3)]
        for q in generate_questions(tracks, 3, random.Random(2), excerpt_duration=20):
            assert q.start_times == [0, 0, 0]

    def test_input_not_mutated(self, sample_tracks):
        before = list(sample_tracks)
        generate_questions(sample_tracks, 5, random.Random(9))
        assert sample_tracks == before
