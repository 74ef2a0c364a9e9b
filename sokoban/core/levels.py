from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from sokoban.core.decoder import Level, decode, encode
from sokoban.core.textmap import parse_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelEntry:
    key: str
    name: str
    data: bytes


class LevelRepository:
    """Packed level buffers loaded from ``data/levels/level<N>.yaml``, in numeric order."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "levels"
        self._levels = self._load_levels()

    def __len__(self) -> int:
        return len(self._levels)

    @property
    def max_index(self) -> int:
        return len(self._levels) - 1

    def all(self) -> List[LevelEntry]:
        return list(self._levels)

    def get(self, index: int) -> LevelEntry:
        if not 0 <= index < len(self._levels):
            raise IndexError(f"level index {index} out of range 0..{self.max_index}")
        return self._levels[index]

    def decode(self, index: int) -> Level:
        """Decode a fresh copy of the level at ``index``."""
        return decode(self.get(index).data)

    def _load_levels(self) -> List[LevelEntry]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Levels directory not found: {base_dir}")

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^level(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        levels: List[LevelEntry] = []
        for level_path in sorted(base_dir.glob("level*.yaml"), key=_sort_key):
            key = level_path.stem
            raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{level_path.name}: expected YAML with 'title' and 'data'")
            title = raw.get("title")
            data = raw.get("data")
            if not title or not isinstance(title, str):
                raise ValueError(f"{level_path.name}: missing or invalid 'title'")
            rows = raw.get("rows")
            if data is not None:
                buffer = self._parse_data(level_path, data)
            elif rows is not None:
                buffer = self._pack_rows(level_path, rows)
            else:
                raise ValueError(f"{level_path.name}: missing 'data' or 'rows'")
            levels.append(LevelEntry(key=key, name=title.strip(), data=buffer))

        if not levels:
            raise ValueError(f"No level files (level*.yaml) found in {base_dir}")
        logger.info("Loaded %d levels from %s", len(levels), base_dir)
        return levels

    @staticmethod
    def _parse_data(level_path: Path, data: object) -> bytes:
        if not data or not isinstance(data, str):
            raise ValueError(f"{level_path.name}: missing or invalid 'data'")
        try:
            # hex may be wrapped over several lines
            return bytes.fromhex("".join(data.split()))
        except ValueError as e:
            raise ValueError(f"{level_path.name}: 'data' is not valid hex: {e}") from e

    @staticmethod
    def _pack_rows(level_path: Path, rows: object) -> bytes:
        """Pack a plain-text layout (list of rows or a block string) into a level buffer."""
        if isinstance(rows, str):
            lines = rows.rstrip("\n").splitlines()
        elif isinstance(rows, list) and all(isinstance(row, str) for row in rows):
            lines = rows
        else:
            raise ValueError(f"{level_path.name}: 'rows' must be a list of strings or a text block")
        try:
            return encode(parse_rows(lines))
        except ValueError as e:
            raise ValueError(f"{level_path.name}: invalid 'rows': {e}") from e
