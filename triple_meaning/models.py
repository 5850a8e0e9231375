from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

_YOUTUBE_ID_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")


def extract_youtube_video_id(url: str) -> str | None:
    """Pull the video id out of ``youtube.com/watch?v=`` or ``youtu.be/`` URLs."""
    m = _YOUTUBE_ID_RE.search(url or "")
    return m.group(1) if m else None


@dataclass
class Track:
    id: str
    title: str
    youtube_url: str
    duration: int | None = None  # seconds

    @property
    def video_id(self) -> str | None:
        return extract_youtube_video_id(self.youtube_url)

    @classmethod
    def from_dict(cls, raw: dict) -> Track:
        return cls(
            id=raw["id"],
            title=raw["title"],
            youtube_url=raw["youtubeUrl"],
            duration=raw.get("duration"),
        )

    def to_dict(self) -> dict:
        d = {"id": self.id, "title": self.title, "youtubeUrl": self.youtube_url}
        if self.duration is not None:
            d["duration"] = self.duration
        return d


@dataclass
class Album:
    id: str
    name: str
    jacket_url: str
    tracks: list[Track] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> Album:
        return cls(
            id=raw["id"],
            name=raw["name"],
            jacket_url=raw.get("jacketUrl", ""),
            tracks=[Track.from_dict(t) for t in raw["tracks"]],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "jacketUrl": self.jacket_url,
            "tracks": [t.to_dict() for t in self.tracks],
        }


@dataclass
class Artist:
    id: str
    name: str
    albums: list[Album] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> Artist:
        return cls(
            id=raw["id"],
            name=raw["name"],
            albums=[Album.from_dict(a) for a in raw["albums"]],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "albums": [a.to_dict() for a in self.albums],
        }


@dataclass
class Catalog:
    artists: list[Artist] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> Catalog:
        """Build a catalog from the parsed ``songs.json`` structure.

        Missing required keys raise ``KeyError``; the loader is expected to
        hand over well-formed data.
        """
        return cls(artists=[Artist.from_dict(a) for a in raw["artists"]])

    def to_dict(self) -> dict:
        return {"artists": [a.to_dict() for a in self.artists]}

    def albums(self) -> Iterator[tuple[Artist, Album]]:
        for artist in self.artists:
            for album in artist.albums:
                yield artist, album

    def find_album(self, album_id: str) -> Album | None:
        for _, album in self.albums():
            if album.id == album_id:
                return album
        return None

    def track_count(self) -> int:
        return sum(len(album.tracks) for _, album in self.albums())


@dataclass
class QuizQuestion:
    question_number: int  # 1-based
    tracks: list[Track]  # always three
    start_times: list[int]  # seconds, positional with tracks
    correct_answers: list[str] = field(default_factory=list)  # track ids, in guess order
    is_answer_revealed: bool = False

    @property
    def track_ids(self) -> list[str]:
        return [t.id for t in self.tracks]

    @property
    def is_complete(self) -> bool:
        return len(self.correct_answers) == 3 or self.is_answer_revealed

    def to_dict(self) -> dict:
        return {
            "questionNumber": self.question_number,
            "tracks": [t.to_dict() for t in self.tracks],
            "startTimes": list(self.start_times),
            "correctAnswers": list(self.correct_answers),
            "isAnswerRevealed": self.is_answer_revealed,
        }
