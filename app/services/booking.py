"""Service helpers for listing movies and booking show seats."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from bson import ObjectId
from pymongo.collection import Collection

from app.db import MovieRepository
from app.services.errors import (
    BookingServiceError,
    CorruptShowData,
    InvalidMovieId,
    InvalidSeatCount,
    MissingFields,
    MovieNotFound,
    NotEnoughSeats,
    ShowNotFound,
    StoreUnavailable,
    UpdateFailed,
)
from app.services.models import BookingOrder, ShowLocation

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("movieId", "showId", "seats", "name", "email", "phoneNumber")
MOVIE_ID_LENGTH = 24

_repo = MovieRepository()


def list_movies(collection: Collection, *, repo: MovieRepository = _repo) -> list[dict[str, Any]]:
    """Return every movie document in store order."""

    try:
        return repo.list_all(collection)
    except Exception as exc:
        logger.exception("Listing movies failed")
        raise StoreUnavailable() from exc


def get_movie(
    collection: Collection, movie_id: str, *, repo: MovieRepository = _repo
) -> dict[str, Any]:
    """Fetch one movie; the id must be 24 characters before the store is queried."""

    logger.info("Received request for movie ID: %s", movie_id)
    if not isinstance(movie_id, str) or len(movie_id) != MOVIE_ID_LENGTH:
        raise InvalidMovieId()

    try:
        movie = repo.get_by_id(collection, movie_id)
    except Exception as exc:
        logger.exception("Querying movie %s failed", movie_id)
        raise StoreUnavailable(str(exc) or None) from exc
    if movie is None:
        raise MovieNotFound()
    return movie


def parse_seat_count(raw: Any) -> int:
    """Parse a requested seat count, accepting ints and integer-looking strings."""

    if isinstance(raw, bool):
        raise InvalidSeatCount()
    if isinstance(raw, int):
        seats = raw
    elif isinstance(raw, float) and raw.is_integer():
        seats = int(raw)
    elif isinstance(raw, str):
        try:
            seats = int(raw.strip())
        except ValueError as exc:
            raise InvalidSeatCount() from exc
    else:
        raise InvalidSeatCount()
    if seats <= 0:
        raise InvalidSeatCount()
    return seats


def validate_booking_request(payload: Mapping[str, Any]) -> BookingOrder:
    """Check presence, id format and seat count before any store access."""

    missing = [field for field in REQUIRED_FIELDS if not payload.get(field)]
    if missing:
        raise MissingFields(missing)

    movie_id = str(payload["movieId"])
    if not ObjectId.is_valid(movie_id):
        raise InvalidMovieId()

    return BookingOrder(
        movie_id=movie_id,
        show_id=str(payload["showId"]),
        seats=parse_seat_count(payload["seats"]),
        name=str(payload["name"]),
        email=str(payload["email"]),
        phone_number=str(payload["phoneNumber"]),
    )


def find_show(movie: Mapping[str, Any], show_id: str) -> ShowLocation | None:
    """Scan every date's show list for ``show_id``."""

    shows_by_date = movie.get("shows") or {}
    for show_date, shows in shows_by_date.items():
        for index, show in enumerate(shows or []):
            if isinstance(show, Mapping) and show.get("id") == show_id:
                return ShowLocation(date=show_date, index=index, show=dict(show))
    return None


def book_seats(
    collection: Collection,
    payload: Mapping[str, Any],
    *,
    repo: MovieRepository = _repo,
) -> BookingOrder:
    """Validate a booking, then reserve the seats with one conditional update."""

    logger.info(
        "Booking request received: movieId=%s showId=%s seats=%s",
        payload.get("movieId"),
        payload.get("showId"),
        payload.get("seats"),
    )
    order = validate_booking_request(payload)

    try:
        movie = repo.get_by_id(collection, order.movie_id)
        if movie is None:
            logger.info("Movie not found with ID: %s", order.movie_id)
            raise MovieNotFound()

        location = find_show(movie, order.show_id)
        if location is None:
            logger.info("Show not found with ID: %s", order.show_id)
            raise ShowNotFound()

        try:
            remaining = location.remaining_seats
        except ValueError as exc:
            logger.error("Show %s stores seat count %r", order.show_id, location.stored_seats)
            raise CorruptShowData() from exc

        logger.info("Available seats: %s", remaining)
        if remaining < order.seats:
            logger.info("Not enough seats requested: %s", order.seats)
            raise NotEnoughSeats()

        matched, modified = repo.reserve_seats(
            collection,
            movie_id=order.movie_id,
            show_id=order.show_id,
            location=location,
            seats=order.seats,
            booking=order.booking_record(),
        )
    except BookingServiceError:
        raise
    except Exception as exc:
        logger.exception("Booking for show %s failed", order.show_id)
        raise StoreUnavailable() from exc

    if matched == 0:
        # Another booking took the seats between the read and the update.
        logger.info("Seats for show %s were taken concurrently", order.show_id)
        raise NotEnoughSeats()
    if modified == 0:
        raise UpdateFailed()
    return order
