"""Exception types shared by the seeding and query paths.

There is no not-found error: an empty point read or query is returned as
``None``.
"""

from typing import Any


class InvalidInputError(ValueError):
    """The caller supplied an unknown data model or an empty search value."""


class StoreUnavailableError(ConnectionError):
    """The document store or the upstream catalog could not be reached."""


class MalformedResponseError(ValueError):
    """Data returned by the store or catalog does not have the expected shape."""


class SeedingError(RuntimeError):
    """A write failed while seeding a model; earlier upserts remain committed.

    Attributes:
        model: Name of the data model whose batch was aborted
        report: Partial SeedingReport with the counts committed so far
    """

    def __init__(self, model: str, report: Any, cause: Exception):
        super().__init__(f"Seeding '{model}' aborted: {cause}")
        self.model = model
        self.report = report
        self.cause = cause
