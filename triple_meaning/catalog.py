"""Load the song catalog and flatten album selections into track pools.

The catalog is the ``songs.json`` structure::

  { "artists": [ { "id", "name", "albums": [
      { "id", "name", "jacketUrl", "tracks": [
          { "id", "title", "youtubeUrl", "duration"? } ] } ] } ] }

Album selections travel between pages as a comma-separated ``albums=``
query parameter.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import httpx

from triple_meaning.models import Artist, Catalog, Track, extract_youtube_video_id  # noqa: F401

_log = logging.getLogger("triple_meaning.catalog")

FETCH_TIMEOUT = 30.0


def tracks_for_albums(
    catalog: Catalog | Iterable[Artist],
    selected_album_ids: Iterable[str],
) -> list[Track]:
    """Return every track of the selected albums, in catalog order.

    Unknown album ids contribute nothing. An empty selection gives an empty
    list, which callers must treat as "nothing to quiz on".
    """
    selected = set(selected_album_ids)
    artists = catalog.artists if isinstance(catalog, Catalog) else catalog
    tracks: list[Track] = []
    for artist in artists:
        for album in artist.albums:
            if album.id in selected:
                tracks.extend(album.tracks)
    return tracks


def album_summaries(catalog: Catalog) -> list[dict]:
    """Flat album list for the album-selection screen."""
    return [
        {
            "id": album.id,
            "name": album.name,
            "jacket_url": album.jacket_url,
            "artist_id": artist.id,
            "artist_name": artist.name,
            "track_count": len(album.tracks),
        }
        for artist, album in catalog.albums()
    ]


def parse_album_ids(param: str | None) -> list[str]:
    """Decode an ``albums`` query value (``"a,b,c"``) into album ids."""
    if not param:
        return []
    return [part.strip() for part in param.split(",") if part.strip()]


def album_query_param(album_ids: list[str]) -> str:
    if not album_ids:
        return ""
    return "albums=" + ",".join(album_ids)


def load_catalog(path: Path) -> Catalog:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    catalog = Catalog.from_dict(raw)
    _log.info(
        "Loaded catalog from %s: %d artists, %d tracks",
        path, len(catalog.artists), catalog.track_count(),
    )
    return catalog


async def fetch_catalog(url: str, client: httpx.AsyncClient | None = None) -> Catalog:
    """Fetch ``songs.json`` once over HTTP.

    No retries: HTTP and transport errors propagate to the caller.
    """
    _log.info("Fetching catalog from %s", url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=FETCH_TIMEOUT) as own_client:
                resp = await own_client.get(url)
                resp.raise_for_status()
                raw = resp.json()
        else:
            resp = await client.get(url)
            resp.raise_for_status()
            raw = resp.json()
    except httpx.HTTPError as e:
        _log.warning("Failed to fetch catalog from %s: %s", url, e)
        raise
    catalog = Catalog.from_dict(raw)
    _log.info("Fetched catalog: %d artists, %d tracks",
              len(catalog.artists), catalog.track_count())
    return catalog
