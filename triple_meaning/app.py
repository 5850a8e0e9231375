"""FastAPI application with all routes."""
from __future__ import annotations

import logging

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from triple_meaning.catalog import album_summaries, fetch_catalog, load_catalog, parse_album_ids
from triple_meaning.config import Settings, load_settings, save_settings
from triple_meaning.models import Catalog
from triple_meaning.question_generator import ValidationError
from triple_meaning.scoring import performance_rating
from triple_meaning.session import EmptySelection, QuestionNotComplete, QuizSession

app = FastAPI(title="Triple Meaning")

_log = logging.getLogger("triple_meaning.app")

# Global state (initialized in startup)
_catalog: Catalog | None = None
_settings: Settings | None = None
_active_sessions: dict[str, QuizSession] = {}  # session_id -> session


def get_catalog() -> Catalog:
    assert _catalog is not None
    return _catalog


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


async def _load_catalog(s: Settings) -> Catalog:
    if s.catalog_url:
        return await fetch_catalog(s.catalog_url)
    path = s.catalog_full_path
    if not path.exists():
        _log.warning("Catalog file not found: %s; starting with an empty catalog", path)
        return Catalog()
    return load_catalog(path)


@app.on_event("startup")
async def startup():
    global _catalog, _settings
    if _catalog is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _catalog = await _load_catalog(_settings)


def _get_session(session_id: str) -> QuizSession:
    session = _active_sessions.get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


def _question_payload(session: QuizSession) -> dict:
    """Serialize the current question for the browser.

    Titles stay hidden until a track is identified or the answer revealed.
    """
    q = session.current
    tracks = []
    for track in q.tracks:
        known = q.is_answer_revealed or track.id in q.correct_answers
        tracks.append({
            "id": track.id if known else None,
            "title": track.title if known else None,
            "identified": track.id in q.correct_answers,
        })
    return {
        "session_id": session.id,
        "question_number": q.question_number,
        "tracks": tracks,
        "start_times": list(q.start_times),
        "playback": session.playback(),
        "excerpt_seconds": session.excerpt_duration,
        "correct_count": len(q.correct_answers),
        "is_answer_revealed": q.is_answer_revealed,
        "complete": q.is_complete,
        "progress": session.progress().to_dict(),
    }


def _score_payload(session: QuizSession) -> dict:
    score = session.final_score()
    return {
        "session_id": session.id,
        "finished": session.finished,
        "score": score.to_dict(),
        "rating": performance_rating(score.percentage),
        "questions": [q.to_dict() for q in session.questions],
    }


# ── API: Catalog ──────────────────────────────────────────────────────────

@app.get("/api/catalog")
async def api_catalog():
    return get_catalog().to_dict()


@app.get("/api/albums")
async def api_albums():
    return {"albums": album_summaries(get_catalog())}


# ── API: Quiz session ────────────────────────────────────────────────────

@app.post("/api/quiz/start")
async def api_quiz_start(request: Request):
    body = await request.json() if await request.body() else {}
    albums = body.get("albums", "")
    album_ids = parse_album_ids(albums) if isinstance(albums, str) else [a for a in albums if a]
    s = get_settings()
    try:
        count = int(body.get("question_count", s.question_count))
    except (TypeError, ValueError):
        raise HTTPException(400, "question_count must be an integer")

    try:
        session = QuizSession.start(
            get_catalog(),
            album_ids,
            question_count=count,
            excerpt_duration=s.excerpt_seconds,
        )
    except EmptySelection as e:
        raise HTTPException(400, str(e))
    except ValidationError as e:
        _log.info("Quiz start rejected for albums %s: %s", album_ids, e)
        raise HTTPException(400, str(e))

    if not session.questions:
        raise HTTPException(400, "question_count must be at least 1")

    _active_sessions[session.id] = session
    return _question_payload(session)


@app.get("/api/quiz/{session_id}")
async def api_quiz_current(session_id: str):
    return _question_payload(_get_session(session_id))


@app.post("/api/quiz/{session_id}/guess")
async def api_quiz_guess(session_id: str, request: Request):
    session = _get_session(session_id)
    body = await request.json()
    track_id = body.get("track_id", "")
    if not track_id:
        raise HTTPException(400, "No track_id provided")
    try:
        result = session.guess(track_id, body.get("slot"))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {
        "outcome": result.outcome,
        "complete": result.question.is_complete,
        "question": _question_payload(session),
    }


@app.post("/api/quiz/{session_id}/reveal")
async def api_quiz_reveal(session_id: str):
    session = _get_session(session_id)
    session.reveal()
    return _question_payload(session)


@app.post("/api/quiz/{session_id}/next")
async def api_quiz_next(session_id: str):
    session = _get_session(session_id)
    try:
        moved = session.advance()
    except QuestionNotComplete as e:
        raise HTTPException(409, str(e))
    if not moved:
        return _score_payload(session)
    return _question_payload(session)


@app.get("/api/quiz/{session_id}/result")
async def api_quiz_result(session_id: str):
    session = _get_session(session_id)
    result = _score_payload(session)
    if session.finished:
        del _active_sessions[session_id]
    return result


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
