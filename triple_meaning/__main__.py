"""Command line for triple-meaning.

Usage:
  python -m triple_meaning serve [--port PORT] [--host HOST] [CATALOG]
  python -m triple_meaning albums [CATALOG]
  python -m triple_meaning preview --albums ID[,ID...] [--count N] [--seed N] [CATALOG]

CATALOG is ``--catalog PATH`` or ``--catalog-url URL`` and overrides the
catalog named in config.json. ``serve`` loads the catalog before the server
starts, so a missing file or unreachable URL stops it right away.
"""
from __future__ import annotations

import asyncio
import sys

DEFAULT_PORT = 8765


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "albums":
        _albums(args[1:])
    elif command == "preview":
        _preview(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, albums, preview")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _int_flag(args: list[str], name: str, default: int | None) -> int | None:
    value = _parse_flag(args, name, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        print(f"{name} expects a whole number, got {value!r}")
        sys.exit(1)


def _settings_from_args(args: list[str]):
    """config.json settings with any ``--catalog``/``--catalog-url`` applied."""
    from triple_meaning.config import load_settings

    settings = load_settings()
    path = _parse_flag(args, "--catalog", "")
    url = _parse_flag(args, "--catalog-url", "")
    if path and url:
        print("Use either --catalog or --catalog-url, not both.")
        sys.exit(1)
    if path:
        settings.catalog_path = path
        settings.catalog_url = ""
    elif url:
        settings.catalog_url = url
    return settings


def _load_catalog_or_exit(settings):
    import httpx

    from triple_meaning.catalog import fetch_catalog, load_catalog

    if settings.catalog_url:
        try:
            return asyncio.run(fetch_catalog(settings.catalog_url))
        except httpx.HTTPError as e:
            print(f"Could not fetch catalog from {settings.catalog_url}: {e}")
            sys.exit(1)
    path = settings.catalog_full_path
    if not path.exists():
        print(f"Catalog not found: {path}")
        sys.exit(1)
    return load_catalog(path)


def _serve(args: list[str]):
    import uvicorn

    from triple_meaning import app as app_module
    from triple_meaning.question_generator import TRACKS_PER_QUESTION

    port = _int_flag(args, "--port", DEFAULT_PORT)
    host = _parse_flag(args, "--host", "127.0.0.1")
    settings = _settings_from_args(args)
    catalog = _load_catalog_or_exit(settings)

    tracks = catalog.track_count()
    if tracks < TRACKS_PER_QUESTION:
        print(f"Catalog has {tracks} tracks; a quiz needs at least {TRACKS_PER_QUESTION}.")
        sys.exit(1)

    # startup() leaves preset globals alone
    app_module._settings = settings
    app_module._catalog = catalog

    albums = sum(1 for _ in catalog.albums())
    print(f"Serving {albums} albums ({tracks} tracks) on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(app_module.app, host=host, port=port, timeout_graceful_shutdown=5)


def _albums(args: list[str]):
    from triple_meaning.catalog import album_summaries

    catalog = _load_catalog_or_exit(_settings_from_args(args))
    summaries = album_summaries(catalog)
    if not summaries:
        print("Catalog has no albums.")
        return
    for a in summaries:
        print(f"  {a['id']:12s} {a['artist_name']} / {a['name']} ({a['track_count']} tracks)")
    print(f"\n{len(summaries)} albums, {catalog.track_count()} tracks")


def _preview(args: list[str]):
    import random

    from triple_meaning.catalog import parse_album_ids
    from triple_meaning.question_generator import ValidationError
    from triple_meaning.session import QuizSession

    settings = _settings_from_args(args)
    catalog = _load_catalog_or_exit(settings)
    album_ids = parse_album_ids(_parse_flag(args, "--albums", ""))
    count = _int_flag(args, "--count", settings.question_count)
    seed = _int_flag(args, "--seed", None)
    rng = random.Random(seed) if seed is not None else None

    try:
        session = QuizSession.start(
            catalog, album_ids,
            question_count=count,
            rng=rng,
            excerpt_duration=settings.excerpt_seconds,
        )
    except ValidationError as e:
        print(f"Cannot build quiz: {e}")
        sys.exit(1)

    for q in session.questions:
        print(f"Question {q.question_number}")
        for track, start in zip(q.tracks, q.start_times):
            print(f"  {start:4d}s  {track.title}  [{track.id}]")


if __name__ == "__main__":
    main()
