"""
Movie records consumed by the scoring and statistics engines.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class RecordError(ValueError):
    """Raised when a stored movie entry cannot be turned into a record."""


class MovieStatus(Enum):
    QUEUED = "towatch"
    WATCHED = "watched"


def parse_timestamp(value):
    """
    Parse a stored timestamp.

    Args:
        value: datetime, date or ISO-8601 string (a trailing "Z" is accepted)

    Returns:
        datetime
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            raise RecordError(f"Invalid timestamp: {value!r}") from e
    raise RecordError(f"Unsupported timestamp type: {type(value).__name__}")


def _optional_int(data, key):
    value = data.get(key)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise RecordError(f"Field {key!r} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class MovieRecord:
    """
    A single watchlist entry.

    ``fun`` carries anticipation while the movie is queued and the rating
    once it has been watched.
    """
    id: str
    status: MovieStatus
    priority: int
    fun: int
    date_added: datetime
    release_year: Optional[int] = None
    date_watched: Optional[datetime] = None
    name: str = ""
    director: Optional[str] = None
    actors: Optional[str] = None

    @property
    def enjoyment_or_anticipation(self):
        return self.fun

    @property
    def is_watched(self):
        return self.status is MovieStatus.WATCHED

    @property
    def rating(self):
        """Rating given after watching, None while still queued."""
        return self.fun if self.is_watched else None

    @property
    def anticipation(self):
        return None if self.is_watched else self.fun

    @classmethod
    def from_dict(cls, data):
        """
        Build a record from the stored JSON shape.

        Args:
            data: Mapping with id, name, status, priority, fun, director,
                actors, year, dateAdded and dateWatched keys

        Returns:
            MovieRecord
        """
        movie_id = data.get("id")
        if movie_id in (None, ""):
            raise RecordError("Movie entry is missing an id")
        if not data.get("dateAdded"):
            raise RecordError(f"Movie {movie_id!r} is missing dateAdded")

        raw_status = data.get("status", MovieStatus.QUEUED.value)
        try:
            status = raw_status if isinstance(raw_status, MovieStatus) else MovieStatus(str(raw_status).lower())
        except ValueError as e:
            raise RecordError(f"Movie {movie_id!r} has unknown status {raw_status!r}") from e

        priority = _optional_int(data, "priority")
        fun = _optional_int(data, "fun")
        date_watched = data.get("dateWatched")

        return cls(
            id=str(movie_id),
            status=status,
            priority=3 if priority is None else priority,
            fun=3 if fun is None else fun,
            date_added=parse_timestamp(data["dateAdded"]),
            release_year=_optional_int(data, "year"),
            date_watched=parse_timestamp(date_watched) if date_watched else None,
            name=data.get("name") or "",
            director=data.get("director") or None,
            actors=data.get("actors") or None
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "priority": self.priority,
            "fun": self.fun,
            "dateAdded": self.date_added.isoformat()
        }
        if self.director:
            data["director"] = self.director
        if self.actors:
            data["actors"] = self.actors
        if self.release_year is not None:
            data["year"] = self.release_year
        if self.date_watched is not None:
            data["dateWatched"] = self.date_watched.isoformat()
        return data


def watched_records(records):
    """Records marked watched that carry a watch date, in input order."""
    return [r for r in records if r.is_watched and r.date_watched is not None]


def queued_records(records):
    return [r for r in records if r.status is MovieStatus.QUEUED]
