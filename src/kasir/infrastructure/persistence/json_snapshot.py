"""Shared plumbing for the JSON-file-backed repositories.

Each repository reads one JSON array per file.  A missing file is an empty
snapshot; anything unreadable or malformed raises RepositoryError naming
the file and the offending record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from kasir.domain.exceptions import RepositoryError, ValidationError
from kasir.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class JsonSnapshot:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load_raw(self) -> list[dict]:
        if not self._file_path.exists():
            logger.debug("Snapshot %s not found, treating as empty", self._file_path)
            return []
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise RepositoryError(f"Cannot read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise RepositoryError(f"{self._file_path.name} must contain a JSON array")
        return records

    def load(self, to_domain: Callable[[dict], T]) -> list[T]:
        result: list[T] = []
        for index, raw in enumerate(self.load_raw()):
            try:
                result.append(to_domain(raw))
            except (KeyError, TypeError, ValueError, ValidationError) as exc:
                raise RepositoryError(
                    f"Malformed record #{index} in {self._file_path.name}: {exc!r}"
                ) from exc
        logger.debug("Loaded %d records from %s", len(result), self._file_path.name)
        return result


# --- Field parsers ------------------------------------------------------------


def parse_timestamp(value: str) -> datetime:
    """ISO-8601 to an aware UTC datetime; naive values are taken as UTC."""
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_amount(value: Any) -> int:
    return Money.of(value).amount


def parse_optional_amount(value: Any) -> int | None:
    return None if value is None else parse_amount(value)


def parse_enum(enum_type: type[E], value: Any) -> E:
    return enum_type(value)
