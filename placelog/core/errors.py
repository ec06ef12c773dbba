"""Exception hierarchy for placelog.

Everything raised on purpose by the core inherits from :class:`PlaceLogError`,
so the controller can tell expected failures from programming errors.
"""

from __future__ import annotations

VALIDATION_MESSAGES = {
    "missing-location": "Please enter a location.",
    "invalid-rating": "Rating must be between 1 and 5.",
    "missing-date": "Please select a planned date.",
    "invalid-visit-type": "Please choose whether the place was visited or planned.",
    "invalid-coordinates": "The selected map position is not a valid coordinate.",
    "no-pending-location": "Click on the map to choose a location first.",
}


class PlaceLogError(Exception):
    """Base exception for all placelog errors."""


class ValidationError(PlaceLogError):
    """Raised when user input cannot become a Place.

    Attributes:
        code: Stable machine-readable reason, e.g. ``"missing-location"``.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(code)

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES.get(self.code, self.code)


class NotFoundError(PlaceLogError):
    """Raised when an identity is not present in the store."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"no place with id {identity!r}")


class DuplicateIdentityError(PlaceLogError):
    """Raised when a place is added under an identity the store already holds."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"place id {identity!r} already exists")


class CorruptStateError(PlaceLogError):
    """Raised when the persisted slot cannot be decoded."""


class PersistenceError(PlaceLogError):
    """Raised when the key/value collaborator fails to read or write."""


class GeolocationError(PlaceLogError):
    """Raised when the current position cannot be determined."""
