"""
Postboard Backend — Posts Route Handlers
==========================================

What:  Collection endpoint (GET/POST /api/posts) and single-resource
       endpoint (GET/PUT/DELETE /api/posts/{post_id}).
How:   FastAPI validates request bodies against PostInput, the handler
       delegates to PostService and returns the response model.

Status codes:
    GET    /api/posts         200 | 500
    POST   /api/posts         201 | 400 (field errors) | 500
    GET    /api/posts/{id}    200 | 400 (invalid id) | 404 | 500
    PUT    /api/posts/{id}    200 | 400 (invalid id / field errors) | 404 | 500
    DELETE /api/posts/{id}    200 | 400 (invalid id) | 404 | 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.schemas.post import (
    ErrorResponse,
    PostCreatedResponse,
    PostDeletedResponse,
    PostInput,
    PostResponse,
    PostUpdatedResponse,
    ValidationErrorResponse,
)
from postboard.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

# post_id is declared as a plain string: malformed IDs must reach
# PostService and come back as 400, not FastAPI's 422.
_INVALID_ID = {"description": "Invalid ID format", "model": ErrorResponse}
_NOT_FOUND = {"description": "Post not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Internal server error", "model": ErrorResponse}


@router.get(
    "/posts",
    response_model=List[PostResponse],
    responses={
        200: {"description": "A list of posts"},
        500: {"description": "Failed to retrieve posts", "model": ErrorResponse},
    },
    summary="Retrieve all posts",
    description="Fetches all posts from the database.",
)
async def list_posts(
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.post(
    "/posts",
    response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Post has been created"},
        400: {"description": "Validation error", "model": ValidationErrorResponse},
        500: {"description": "Failed to create Post", "model": ErrorResponse},
    },
    summary="Create a new post",
    description="Creates a new post with the provided data.",
)
async def create_post(
    payload: PostInput,
    db: AsyncSession = Depends(get_db_session),
) -> PostCreatedResponse:
    return await post_service.create_post(db, payload)


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={
        200: {"description": "Successfully retrieved the post"},
        400: _INVALID_ID,
        404: _NOT_FOUND,
        500: _SERVER_ERROR,
    },
    summary="Retrieve a post by ID",
    description="Fetches a single post from the database using its unique ID.",
)
async def get_post(
    post_id: str = Path(description="The ID of the post (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.put(
    "/posts/{post_id}",
    response_model=PostUpdatedResponse,
    responses={
        200: {"description": "Successfully updated the post"},
        400: {"description": "Invalid input or ID format", "model": ValidationErrorResponse},
        404: _NOT_FOUND,
        500: _SERVER_ERROR,
    },
    summary="Update a post by ID",
    description=(
        "Replaces a post in the database using its unique ID. "
        "The full post payload is required; partial updates are not supported."
    ),
)
async def update_post(
    payload: PostInput,
    post_id: str = Path(description="The ID of the post (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> PostUpdatedResponse:
    return await post_service.update_post(db, post_id, payload)


@router.delete(
    "/posts/{post_id}",
    response_model=PostDeletedResponse,
    responses={
        200: {"description": "Post successfully deleted"},
        400: _INVALID_ID,
        404: _NOT_FOUND,
        500: _SERVER_ERROR,
    },
    summary="Delete a post by ID",
    description="Removes a post from the database using its unique ID.",
)
async def delete_post(
    post_id: str = Path(description="The ID of the post (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> PostDeletedResponse:
    return await post_service.delete_post(db, post_id)
