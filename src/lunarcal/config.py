from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings, read from the environment:

      LUNARCAL_HOLIDAYS   path to an external holiday dataset (JSON or CSV)
      XDG_CACHE_HOME      base of the user cache (default ~/.cache)
      LUNARCAL_LOG_LEVEL  logging level name for the CLI (default WARNING)
    """
    holidays_path: Optional[Path] = None
    cache_dir: Path = Path.home() / ".cache" / "lunarcal"
    log_level: str = "WARNING"

    @property
    def cached_holidays_path(self) -> Path:
        return self.cache_dir / "holidays.json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        p = env.get("LUNARCAL_HOLIDAYS", "").strip()
        holidays_path = Path(p).expanduser() if p else None

        xdg = env.get("XDG_CACHE_HOME", "").strip()
        cache_dir = (Path(xdg).expanduser() / "lunarcal") if xdg else (Path.home() / ".cache" / "lunarcal")

        log_level = env.get("LUNARCAL_LOG_LEVEL", "").strip().upper() or "WARNING"
        return cls(holidays_path=holidays_path, cache_dir=cache_dir, log_level=log_level)

    def holiday_search_paths(self) -> list[Path]:
        """External dataset locations, in priority order."""
        out = []
        if self.holidays_path is not None:
            out.append(self.holidays_path)
        out.append(self.cached_holidays_path)
        return out
