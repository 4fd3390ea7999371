"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from commenttree.application.usecase.comment import (
    CommentNodeResponse,
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentsRequest,
    DeleteCommentsUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from commenttree.domain.error import StoreError, ValidationError

router = APIRouter(prefix="/api/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str
    parent_id: str | None = None  # Parent comment ID for replies


def _lenient_int(value: str) -> int:
    """Parse a query integer; anything unparsable counts as 0."""
    try:
        return int(value)
    except ValueError:
        return 0


def _store_unavailable(e: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(e),
    )


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CommentResponse:
    """Create a root comment or a reply.

    Args:
        request: Comment text and optional parent ID
        create_comment_use_case: Create comment use case from DI

    Returns:
        The created comment

    Raises:
        HTTPException: 400 on invalid input, 503 when the store fails
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(text=request.text, parent_id=request.parent_id or "")
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)


@router.get("", response_model=list[CommentNodeResponse])
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    parent: str = "",
    search: str = "",
    page: str = "",
    page_size: str = "",
    sort: str = "",
) -> JSONResponse:
    """List or search comments as a forest.

    Numeric parameters are parsed leniently; missing or invalid values fall
    back to the defaults. The forest is rendered by the use case and sent as
    is; ``response_model`` only documents its shape.

    Args:
        get_comments_use_case: Get comments use case from DI
        parent: Subtree root ID
        search: Search text
        page: 1-based page number
        page_size: Page size
        sort: "asc" (default) or "desc"

    Returns:
        Forest of comments

    Raises:
        HTTPException: 400 on a malformed parent, 503 when the store fails
    """
    try:
        forest = await get_comments_use_case.execute(
            GetCommentsRequest(
                parent=parent,
                search=search,
                page=_lenient_int(page),
                page_size=_lenient_int(page_size),
                sort=sort,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)
    return JSONResponse(content=forest)


@router.delete("", include_in_schema=False)
@router.delete("/", include_in_schema=False)
async def delete_comments_without_id() -> None:
    """DELETE with no comment ID in the path."""
    logfire.warn("Delete rejected", error="id is required")
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="id is required")


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comments(
    comment_id: str,
    delete_comments_use_case: FromDishka[DeleteCommentsUseCase],
) -> Response:
    """Soft-delete a comment and all of its replies.

    Unknown and already deleted comments are accepted silently.

    Raises:
        HTTPException: 400 on a malformed ID, 503 when the store fails
    """
    try:
        await delete_comments_use_case.execute(DeleteCommentsRequest(comment_id=comment_id))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError as e:
        raise _store_unavailable(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
