import pytest
import mongomock
from bson import ObjectId
from fastapi.testclient import TestClient

from app.db import get_collection
from app.main import app

MOVIE_ID = "65a1f0c2e4b0a1b2c3d4e5f6"
STRING_MOVIE_ID = "A" * 24


@pytest.fixture
def collection():
    return mongomock.MongoClient().movie_db.movies


@pytest.fixture
def seeded(collection):
    collection.insert_many(
        [
            {
                "_id": ObjectId(MOVIE_ID),
                "title": "Dune: Part Two",
                "shows": {
                    "2024-03-01": [
                        {"id": "S1", "seats": 5, "bookings": []},
                        {"id": "S2", "seats": 8, "bookings": []},
                    ],
                    "2024-03-02": [
                        {"id": "S3", "seats": 2, "bookings": []},
                    ],
                },
            },
            {
                "_id": STRING_MOVIE_ID,
                "title": "Past Lives",
                "shows": {"2024-01-01": [{"id": "S9", "seats": 10, "bookings": []}]},
            },
        ]
    )
    return collection


@pytest.fixture
def client(seeded):
    app.dependency_overrides[get_collection] = lambda: seeded
    yield TestClient(app)
    app.dependency_overrides.clear()
