"""MongoDB client management and the movie repository."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection

from app.core.config import get_settings
from app.services.models import ShowLocation

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    """Return the process-wide client (connections are opened lazily)."""

    settings = get_settings()
    return MongoClient(settings.db_url)


def close_client() -> None:
    if get_client.cache_info().currsize:
        get_client().close()
        get_client.cache_clear()


def get_collection() -> Collection:
    """FastAPI-friendly dependency returning the movies collection."""

    settings = get_settings()
    return get_client()[settings.db_name][settings.collection_name]


def movie_id_filter(movie_id: str) -> dict[str, Any]:
    """Match a movie whose ``_id`` is stored either as an ObjectId or as a string."""

    if ObjectId.is_valid(movie_id):
        return {"_id": {"$in": [ObjectId(movie_id), movie_id]}}
    return {"_id": movie_id}


class MovieRepository:
    """High level data access helpers for movie documents."""

    def list_all(self, collection: Collection) -> list[dict[str, Any]]:
        return list(collection.find({}))

    def get_by_id(self, collection: Collection, movie_id: str) -> dict[str, Any] | None:
        return collection.find_one(movie_id_filter(movie_id))

    def reserve_seats(
        self,
        collection: Collection,
        *,
        movie_id: str,
        show_id: str,
        location: ShowLocation,
        seats: int,
        booking: dict[str, Any],
    ) -> tuple[int, int]:
        """Decrement a show's seats and append a booking in one conditional update.

        The filter only matches while the show at ``location`` still carries
        ``show_id`` and has at least ``seats`` remaining, so concurrent
        bookings cannot drive the count below zero. A count stored as a
        string is matched on the exact value that was read and rewritten as
        an int. Returns the matched and modified counts reported by the store.
        """

        seats_path = f"{location.path}.seats"
        query = movie_id_filter(movie_id)
        query[f"{location.path}.id"] = show_id
        if isinstance(location.stored_seats, int) and not isinstance(location.stored_seats, bool):
            query[seats_path] = {"$gte": seats}
            seat_update = {"$inc": {seats_path: -seats}}
        else:
            query[seats_path] = location.stored_seats
            seat_update = {"$set": {seats_path: location.remaining_seats - seats}}
        result = collection.update_one(
            query,
            {
                **seat_update,
                "$push": {f"{location.path}.bookings": booking},
            },
        )
        logger.info(
            "Update result for show %s: matched=%s modified=%s",
            show_id,
            result.matched_count,
            result.modified_count,
        )
        return result.matched_count, result.modified_count
