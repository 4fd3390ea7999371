"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comments import DeleteCommentsRequest, DeleteCommentsUseCase
from .get_comments import GetCommentsRequest, GetCommentsUseCase
from .responses import CommentNodeResponse, CommentResponse, serialize_forest

__all__ = [
    "CommentNodeResponse",
    "CommentResponse",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentsRequest",
    "DeleteCommentsUseCase",
    "GetCommentsRequest",
    "GetCommentsUseCase",
    "serialize_forest",
]
