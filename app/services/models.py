"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class BookingOrder:
    """A booking request that passed validation."""

    movie_id: str
    show_id: str
    seats: int
    name: str
    email: str
    phone_number: str

    def booking_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "seats": self.seats,
        }


@dataclass(slots=True)
class ShowLocation:
    """Where a show sits inside a movie document."""

    date: str
    index: int
    show: dict[str, Any]

    @property
    def path(self) -> str:
        return f"shows.{self.date}.{self.index}"

    @property
    def stored_seats(self) -> Any:
        return self.show.get("seats")

    @property
    def remaining_seats(self) -> int:
        """Stored seat count as an int; raises ``ValueError`` for non-integer values."""

        raw = self.stored_seats
        if isinstance(raw, bool):
            raise ValueError(f"seat count {raw!r} is not an integer")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        if isinstance(raw, str):
            return int(raw.strip())
        raise ValueError(f"seat count {raw!r} is not an integer")
