"""Document shapes persisted to RavenDB by the four data models.

Every document class is a dataclass with ``eq=False`` so that instances are
hashable by identity, which RavenDB's session needs for entity tracking.
Field names are the persisted attribute names; ``title`` is always the
lowercased partition key and ``original_title`` keeps display casing.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from moviemodeling.constants import MOVIE_TYPE, PERSON_TYPE


@dataclass(frozen=True)
class Genre:
    id: str
    name: str


@dataclass(frozen=True)
class PersonRef:
    """An actor or director as projected onto a movie document."""

    id: str
    name: str
    original_name: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class Review:
    id: str
    critic_review: str | None = None
    critic_score: float | None = None


@dataclass(frozen=True)
class Role:
    """One movie credit on a Hybrid person document."""

    movie_id: str
    movie_title: str
    mpaa_rating: str | None
    release_date: str | None
    year: int | None
    poster_url: str | None
    role_name: str


class _Document:
    """Shared behaviour for persisted documents."""

    def __hash__(self) -> int:
        """Hash by object identity for RavenDB session tracking."""
        return id(self)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(eq=False)
class MovieDocument(_Document):
    """Movie document stored in every data model.

    Attributes:
        id: External id of the source movie
        type: Always "movie"
        title: Lowercased title, used as the partition key
        original_title: Title as published by the catalog
        genres: Zero or one genre entries
        actors: Actor projections with lowercased names
        directors: Director projections with lowercased names
        reviews: Critic reviews in catalog order
    """

    id: str
    title: str
    original_title: str
    type: str = MOVIE_TYPE
    tagline: str | None = None
    description: str | None = None
    mpaa_rating: str | None = None
    release_date: str | None = None
    year: int | None = None
    poster_url: str | None = None
    genres: list[Genre] = field(default_factory=list)
    actors: list[PersonRef] = field(default_factory=list)
    directors: list[PersonRef] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)


@dataclass(eq=False)
class EmbeddedPersonDocument(_Document):
    """Person document in the Embedded model, carrying the full movie payload."""

    id: str
    title: str
    original_title: str
    movie_id: str
    movie_title: str
    type: str = PERSON_TYPE
    tagline: str | None = None
    description: str | None = None
    mpaa_rating: str | None = None
    release_date: str | None = None
    year: int | None = None
    poster_url: str | None = None
    genres: list[Genre] = field(default_factory=list)
    actors: list[PersonRef] = field(default_factory=list)
    directors: list[PersonRef] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)


@dataclass(eq=False)
class ReferencePersonDocument(_Document):
    """Person document in the Reference model: minimal per-movie reference data."""

    id: str
    title: str
    original_title: str
    movie_id: str
    movie_title: str
    type: str = PERSON_TYPE
    mpaa_rating: str | None = None
    release_date: str | None = None
    year: int | None = None
    poster_url: str | None = None


@dataclass(eq=False)
class HybridPersonDocument(_Document):
    """Person document in the Hybrid model: one per person, with every role."""

    id: str
    title: str
    original_title: str
    type: str = PERSON_TYPE
    roles: list[Role] = field(default_factory=list)
