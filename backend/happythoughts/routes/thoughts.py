"""
Happy Thoughts API — Thought Route Handlers
============================================

What:  /thoughts list, detail, create, update, delete and like endpoints.
How:   Each handler extracts request data, delegates one operation to
       ThoughtService and wraps the result in an Envelope. Errors are raised
       as application exceptions and rendered by the handlers in main.py.

Routes:
    GET    /thoughts               filtered list (404 when nothing matches)
    GET    /thoughts/{id}          single thought
    POST   /thoughts               create (token optional, see dependencies.py)
    PATCH  /thoughts/{id}          partial update
    DELETE /thoughts/{id}          delete, returns the deleted thought
    POST   /thoughts/{id}/like     hearts + 1
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.database import get_db_session
from happythoughts.dependencies import get_optional_user, get_thought_service
from happythoughts.models.user import User
from happythoughts.schemas.common import Envelope, ErrorResponse
from happythoughts.schemas.thought import ThoughtCreate, ThoughtResponse, ThoughtUpdate
from happythoughts.services.thought_service import ThoughtService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thoughts", tags=["Thoughts"])

NOT_FOUND = {404: {"description": "Thought not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Validation or database error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=Envelope[List[ThoughtResponse]],
    responses={404: {"description": "No thoughts matched", "model": ErrorResponse}, **SERVER_ERROR},
    summary="List thoughts, newest first",
)
async def list_thoughts(
    message: Optional[str] = Query(default=None, description="Exact message, case-insensitive"),
    hearts: Optional[str] = Query(default=None, description="Exact number of hearts"),
    category: Optional[str] = Query(default=None, description="happy, grateful, funny, inspiring or calm"),
    date: Optional[str] = Query(default=None, description="Created on or after (ISO 8601)"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Max results (default: all)"),
    db: AsyncSession = Depends(get_db_session),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[List[ThoughtResponse]]:
    params = {"message": message, "hearts": hearts, "category": category, "date": date}
    results = await thoughts.list(db, params, limit=limit)
    return Envelope(response=results, message=f"Found {len(results)} thoughts")


@router.get(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a single thought by ID",
)
async def get_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[ThoughtResponse]:
    thought = await thoughts.get(db, thought_id)
    return Envelope(response=thought, message="Thought found")


@router.post(
    "",
    status_code=201,
    response_model=Envelope[ThoughtResponse],
    responses={401: {"description": "Invalid access token", "model": ErrorResponse}, **SERVER_ERROR},
    summary="Post a new happy thought",
)
async def create_thought(
    payload: ThoughtCreate,
    db: AsyncSession = Depends(get_db_session),
    user: Optional[User] = Depends(get_optional_user),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[ThoughtResponse]:
    thought = await thoughts.create(db, payload, user_id=user.id if user else None)
    return Envelope(response=thought, message="Thought created")


@router.patch(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Update some fields of a thought",
)
async def update_thought(
    thought_id: str,
    payload: ThoughtUpdate,
    db: AsyncSession = Depends(get_db_session),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[ThoughtResponse]:
    thought = await thoughts.update(db, thought_id, payload)
    return Envelope(response=thought, message="Thought updated")


@router.delete(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a thought",
)
async def delete_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[ThoughtResponse]:
    thought = await thoughts.delete(db, thought_id)
    return Envelope(response=thought, message="Thought deleted")


@router.post(
    "/{thought_id}/like",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Give a thought one more heart",
)
async def like_thought(
    thought_id: str,
    db: AsyncSession = Depends(get_db_session),
    thoughts: ThoughtService = Depends(get_thought_service),
) -> Envelope[ThoughtResponse]:
    thought = await thoughts.like(db, thought_id)
    return Envelope(response=thought, message="Heart added")
