"""FastAPI entrypoint wiring the movie repository and booking service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from bson import ObjectId
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pymongo.collection import Collection

from app.core.config import get_settings
from app.db import close_client, get_collection
from app.services import booking as booking_service
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

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Release the MongoDB client on shutdown."""

    yield
    close_client()


app = FastAPI(title="Movie Booking Service", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Validation failures keep the legacy 401 code that existing clients expect.
_ERROR_STATUS: dict[type[BookingServiceError], int] = {
    MissingFields: status.HTTP_401_UNAUTHORIZED,
    InvalidMovieId: status.HTTP_400_BAD_REQUEST,
    InvalidSeatCount: status.HTTP_401_UNAUTHORIZED,
    MovieNotFound: status.HTTP_404_NOT_FOUND,
    ShowNotFound: status.HTTP_404_NOT_FOUND,
    NotEnoughSeats: status.HTTP_404_NOT_FOUND,
    UpdateFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
    CorruptShowData: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class BookingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Values are checked by the booking service so that every rejection
    # carries the same message and status code.
    movie_id: Any = Field(default=None, alias="movieId")
    show_id: Any = Field(default=None, alias="showId")
    seats: Any = None
    name: Any = None
    email: Any = None
    phone_number: Any = Field(default=None, alias="phoneNumber")


class MessageResponse(BaseModel):
    message: str


@app.exception_handler(BookingServiceError)
async def booking_error_handler(_: Request, exc: BookingServiceError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    content: dict[str, Any] = {"message": exc.message}
    if isinstance(exc, MissingFields):
        content["missingFields"] = exc.missing_fields
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body"},
    )


@app.get("/movie/get-movies")
def list_movies(collection: Collection = Depends(get_collection)) -> JSONResponse:
    movies = booking_service.list_movies(collection)
    return JSONResponse(content=_encode_documents(movies))


@app.post("/movie/book-movie", response_model=MessageResponse)
def book_movie(
    payload: BookingRequest | None = None,
    collection: Collection = Depends(get_collection),
) -> MessageResponse:
    """Reserve seats for a show and record the booking."""

    body = payload.model_dump(by_alias=True) if payload else {}
    booking_service.book_seats(collection, body)
    return MessageResponse(message="Booking created successfully")


@app.get("/movie/{movie_id}")
def get_movie(movie_id: str, collection: Collection = Depends(get_collection)) -> JSONResponse:
    movie = booking_service.get_movie(collection, movie_id)
    return JSONResponse(content=_encode_documents(movie))


def _encode_documents(documents: Any) -> Any:
    return jsonable_encoder(documents, custom_encoder={ObjectId: str})
