"""
Happy Thoughts API — Dog Route Handlers
========================================

What:  /dogs endpoints, the same shape as /thoughts with `likes` as the counter.

One exception to the envelope: GET /dogs/name/{name} is the lookup from the
first version of the Dogs API and still answers with the bare dog object, or
`{"error": "Dog not found"}` with a 404.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.database import get_db_session
from happythoughts.dependencies import get_dog_service, get_optional_user
from happythoughts.models.user import User
from happythoughts.schemas.common import Envelope, ErrorResponse
from happythoughts.schemas.dog import DogCreate, DogResponse, DogUpdate
from happythoughts.services.dog_service import DogService

router = APIRouter(prefix="/dogs", tags=["Dogs"])

NOT_FOUND = {404: {"description": "Dog not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Validation or database error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=Envelope[List[DogResponse]],
    responses={404: {"description": "No dogs matched", "model": ErrorResponse}, **SERVER_ERROR},
    summary="List dogs, newest first",
)
async def list_dogs(
    name: Optional[str] = Query(default=None),
    breed: Optional[str] = Query(default=None, description="Exact breed, case-insensitive"),
    color: Optional[str] = Query(default=None, description="Exact color, case-insensitive"),
    vaccinated: Optional[str] = Query(default=None, description="'true' or 'false'"),
    age: Optional[str] = Query(default=None),
    likes: Optional[str] = Query(default=None),
    date: Optional[str] = Query(default=None, description="Added on or after (ISO 8601)"),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[List[DogResponse]]:
    params = {
        "name": name,
        "breed": breed,
        "color": color,
        "vaccinated": vaccinated,
        "age": age,
        "likes": likes,
        "date": date,
    }
    results = await dogs.list(db, params, limit=limit)
    return Envelope(response=results, message=f"Found {len(results)} dogs")


@router.get(
    "/name/{name}",
    response_model=DogResponse,
    responses={404: {"description": "Dog not found"}},
    summary="Find a dog by name (bare response, no envelope)",
)
async def get_dog_by_name(
    name: str,
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
):
    dog = await dogs.find_by_name(db, name)
    if dog is None:
        return JSONResponse(status_code=404, content={"error": "Dog not found"})
    return dog


@router.get(
    "/{dog_id}",
    response_model=Envelope[DogResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a single dog by ID",
)
async def get_dog(
    dog_id: str,
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[DogResponse]:
    return Envelope(response=await dogs.get(db, dog_id), message="Dog found")


@router.post(
    "",
    status_code=201,
    response_model=Envelope[DogResponse],
    responses={401: {"description": "Invalid access token", "model": ErrorResponse}, **SERVER_ERROR},
    summary="Add a dog",
)
async def create_dog(
    payload: DogCreate,
    db: AsyncSession = Depends(get_db_session),
    user: Optional[User] = Depends(get_optional_user),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[DogResponse]:
    dog = await dogs.create(db, payload, user_id=user.id if user else None)
    return Envelope(response=dog, message="Dog created")


@router.patch(
    "/{dog_id}",
    response_model=Envelope[DogResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Update some fields of a dog",
)
async def update_dog(
    dog_id: str,
    payload: DogUpdate,
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[DogResponse]:
    return Envelope(response=await dogs.update(db, dog_id, payload), message="Dog updated")


@router.delete(
    "/{dog_id}",
    response_model=Envelope[DogResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a dog",
)
async def delete_dog(
    dog_id: str,
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[DogResponse]:
    return Envelope(response=await dogs.delete(db, dog_id), message="Dog deleted")


@router.post(
    "/{dog_id}/like",
    response_model=Envelope[DogResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Like a dog",
)
async def like_dog(
    dog_id: str,
    db: AsyncSession = Depends(get_db_session),
    dogs: DogService = Depends(get_dog_service),
) -> Envelope[DogResponse]:
    return Envelope(response=await dogs.like(db, dog_id), message="Like added")
