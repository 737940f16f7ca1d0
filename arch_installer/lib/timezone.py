from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

# Duplicate trees of the whole database; offering them only confuses.
SKIP_DIRS = frozenset({"posix", "right"})


@dataclass(frozen=True)
class Timezone:
    continent: str
    city: str

    def __str__(self) -> str:
        return f"{self.continent}/{self.city}"

    @classmethod
    def parse(cls, text: str) -> "Timezone":
        continent, sep, city = text.strip().partition("/")
        if not sep or not continent or not city or "/" in city or ".." in (continent, city):
            raise ValueError(f"Malformed timezone selection: {text!r}")
        return cls(continent=continent, city=city)


def list_continents(zoneinfo_dir: str | Path) -> List[str]:
    root = Path(zoneinfo_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"zoneinfo directory not found: {root}")
    return sorted(p.name for p in root.iterdir() if p.is_dir() and p.name not in SKIP_DIRS)


def list_cities(zoneinfo_dir: str | Path, continent: str) -> List[str]:
    root = Path(zoneinfo_dir) / continent
    return sorted(p.name for p in root.iterdir() if p.is_file())
