"""Search outcome states.

Exactly one of ``Idle``, ``Loading``, ``Success`` or ``Error`` describes a
session's "all movies" section at any time.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Union

from popcornpilot.types.movies import MovieSummary


@dataclass(frozen=True)
class Idle:
    """No request has been issued yet."""

    kind: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Loading:
    """A request is in flight."""

    kind: ClassVar[str] = "loading"


@dataclass(frozen=True)
class Success:
    """The latest request returned a (possibly empty) list of movies."""

    movies: tuple[MovieSummary, ...] = field(default_factory=tuple)
    kind: ClassVar[str] = "success"


@dataclass(frozen=True)
class Error:
    """The latest request failed; ``message`` is safe to display."""

    message: str
    kind: ClassVar[str] = "error"


SearchOutcome = Union[Idle, Loading, Success, Error]
