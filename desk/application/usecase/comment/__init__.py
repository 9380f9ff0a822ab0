"""Comment use cases."""

from .count_comments import (
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
)
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase

__all__ = [
    "CountCommentsRequest",
    "CountCommentsResponse",
    "CountCommentsUseCase",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
]
