"""Runtime settings.

Values come from the environment with sensible defaults; CLI options
override them.  Nothing here is read by the pricing, stock or report
functions, which take every input as an argument.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path.cwd() / "data"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        log_file = env.get("KASIR_LOG_FILE")
        return Settings(
            data_dir=Path(env.get("KASIR_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=env.get("KASIR_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            log_file=Path(log_file) if log_file else None,
        )
