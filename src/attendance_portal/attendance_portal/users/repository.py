from __future__ import annotations

from typing import Optional, Protocol

from .model import Person


class PersonRepository(Protocol):
    """Repository interface for Person.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[Person]:
        """Case-insensitive lookup; ``email`` is expected lower-cased."""

        raise NotImplementedError
