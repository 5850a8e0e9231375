from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "catalog_path": "data/songs.json",
    "catalog_url": "",
    "question_count": 5,
    "excerpt_seconds": 5,
}


@dataclass
class Settings:
    catalog_path: str = DEFAULTS["catalog_path"]
    catalog_url: str = DEFAULTS["catalog_url"]
    question_count: int = DEFAULTS["question_count"]
    excerpt_seconds: int = DEFAULTS["excerpt_seconds"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def catalog_full_path(self) -> Path:
        return self.project_root / self.catalog_path

    def to_dict(self) -> dict:
        return {
            "catalog_path": self.catalog_path,
            "catalog_url": self.catalog_url,
            "question_count": self.question_count,
            "excerpt_seconds": self.excerpt_seconds,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
