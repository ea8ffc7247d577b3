"""Pure mappings from a catalog movie to the documents of each data model.

Nothing here touches the store: given the same SourceMovie and base URL,
every function returns the same documents.
"""

from datetime import datetime

from moviemodeling.constants import (
    ACTOR_MARKER,
    ACTOR_ROLE_NAME,
    DIRECTOR_MARKER,
    DIRECTOR_ROLE_NAME,
)
from moviemodeling.service.catalog import SourceMovie, SourcePerson
from moviemodeling.service.database.models import (
    EmbeddedPersonDocument,
    Genre,
    HybridPersonDocument,
    MovieDocument,
    PersonRef,
    ReferencePersonDocument,
    Review,
    Role,
)

RELEASE_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_year(release_date: str | None) -> int | None:
    """Extract the year from a free-text release date.

    Returns None when the value is empty or matches no known format.
    """
    if not release_date or not release_date.strip():
        return None

    text = release_date.strip()
    try:
        return datetime.fromisoformat(text).year
    except ValueError:
        pass
    for fmt in RELEASE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).year
        except ValueError:
            continue
    return None


def full_url(path: str | None, base_url: str) -> str | None:
    """Turn a catalog-relative image path into an absolute URL.

    Args:
        path: Relative path, absolute URL, or empty
        base_url: Base URL of the media API

    Returns:
        str | None: None for an empty path, the path unchanged if it already
        has a scheme, otherwise the path joined to ``base_url`` with a single
        slash at the join
    """
    if not path:
        return None
    if "://" in path or path.lower().startswith("http"):
        return path
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def genres_for(movie: SourceMovie) -> list[Genre]:
    if not movie.genre:
        return []
    return [Genre(id=movie.genre.lower(), name=movie.genre)]


def _person_ref(person: SourcePerson, base_url: str) -> PersonRef:
    return PersonRef(
        id=person.person_id,
        name=person.name.lower(),
        original_name=person.name,
        image_url=full_url(person.image_url, base_url),
    )


def _reviews_for(movie: SourceMovie) -> list[Review]:
    return [
        Review(id=review.review_id or "", critic_review=review.text, critic_score=review.score)
        for review in movie.reviews
    ]


def person_document_id(movie: SourceMovie, person_id: str, role_marker: str) -> str:
    """Composite id of a per-movie person document, e.g. ``movm1act7``."""
    return f"mov{movie.external_id}{role_marker}{person_id}"


def hybrid_person_id(person_id: str, role_marker: str) -> str:
    """Id of a Hybrid person document, e.g. ``act7``."""
    return f"{role_marker}{person_id}"


def to_movie_document(movie: SourceMovie, base_url: str) -> MovieDocument:
    """Project a catalog movie onto the movie document shared by all models."""
    return MovieDocument(
        id=movie.external_id,
        title=movie.title.lower(),
        original_title=movie.title,
        tagline=movie.tagline,
        description=movie.description,
        mpaa_rating=movie.mpaa_rating,
        release_date=movie.release_date,
        year=parse_year(movie.release_date),
        poster_url=full_url(movie.poster_url, base_url),
        genres=genres_for(movie),
        actors=[_person_ref(actor, base_url) for actor in movie.actors],
        directors=[_person_ref(director, base_url) for director in movie.directors],
        reviews=_reviews_for(movie),
    )


def to_embedded_person(
    movie: SourceMovie,
    person_id: str,
    person_name: str,
    role_marker: str,
    base_url: str,
) -> EmbeddedPersonDocument:
    """Build an Embedded person document with the whole movie copied in."""
    movie_doc = to_movie_document(movie, base_url)
    return EmbeddedPersonDocument(
        id=person_document_id(movie, person_id, role_marker),
        title=person_name.lower(),
        original_title=person_name,
        movie_id=movie.external_id,
        movie_title=movie.title,
        tagline=movie_doc.tagline,
        description=movie_doc.description,
        mpaa_rating=movie_doc.mpaa_rating,
        release_date=movie_doc.release_date,
        year=movie_doc.year,
        poster_url=movie_doc.poster_url,
        genres=movie_doc.genres,
        actors=movie_doc.actors,
        directors=movie_doc.directors,
        reviews=movie_doc.reviews,
    )


def to_reference_person(
    movie: SourceMovie,
    person_id: str,
    person_name: str,
    role_marker: str,
    base_url: str,
) -> ReferencePersonDocument:
    """Build a Reference person document holding only movie reference fields."""
    return ReferencePersonDocument(
        id=person_document_id(movie, person_id, role_marker),
        title=person_name.lower(),
        original_title=person_name,
        movie_id=movie.external_id,
        movie_title=movie.title,
        mpaa_rating=movie.mpaa_rating,
        release_date=movie.release_date,
        year=parse_year(movie.release_date),
        poster_url=full_url(movie.poster_url, base_url),
    )


def to_role(movie: SourceMovie, role_name: str, base_url: str) -> Role:
    return Role(
        movie_id=movie.external_id,
        movie_title=movie.title,
        mpaa_rating=movie.mpaa_rating,
        release_date=movie.release_date,
        year=parse_year(movie.release_date),
        poster_url=full_url(movie.poster_url, base_url),
        role_name=role_name,
    )


def credits_for(movie: SourceMovie) -> list[tuple[SourcePerson, str, str]]:
    """List a movie's credits as (person, role marker, role name), actors first."""
    credits = [(actor, ACTOR_MARKER, ACTOR_ROLE_NAME) for actor in movie.actors]
    credits.extend(
        (director, DIRECTOR_MARKER, DIRECTOR_ROLE_NAME) for director in movie.directors
    )
    return credits


class HybridAccumulator:
    """Collects one HybridPersonDocument per distinct role-prefixed person id.

    Persons are kept in first-seen order and each person's roles in the order
    movies were added.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url
        self._people: dict[str, HybridPersonDocument] = {}

    def add_movie(self, movie: SourceMovie) -> None:
        for person, marker, role_name in credits_for(movie):
            key = hybrid_person_id(person.person_id, marker)
            document = self._people.get(key)
            if document is None:
                document = HybridPersonDocument(
                    id=key,
                    title=person.name.lower(),
                    original_title=person.name,
                )
                self._people[key] = document
            document.roles.append(to_role(movie, role_name, self.base_url))

    def documents(self) -> list[HybridPersonDocument]:
        return list(self._people.values())

    def __len__(self) -> int:
        return len(self._people)
