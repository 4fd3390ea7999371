"""Comment response models shared by the comment use cases."""

from datetime import datetime
from typing import Any, Sequence

from pydantic import BaseModel, TypeAdapter

from commenttree.domain.model import Comment
from commenttree.domain.tree import CommentNode

_timestamp = TypeAdapter(datetime)


class CommentResponse(BaseModel):
    """A single comment as returned by the API."""

    id: str
    text: str
    created_at: datetime
    parent_id: str | None

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=str(comment.id),
            text=comment.text,
            created_at=comment.created_at,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
        )


class CommentNodeResponse(CommentResponse):
    """Comment tree node for API response.

    Documents the shape of a forest node. Forests themselves are rendered by
    ``serialize_forest``: validating arbitrarily deep threads through a
    recursive model would hit pydantic's depth guard.
    """

    children: list["CommentNodeResponse"]


def _comment_json(comment: Comment) -> dict[str, Any]:
    return {
        "id": str(comment.id),
        "text": comment.text,
        "created_at": _timestamp.dump_python(comment.created_at, mode="json"),
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
    }


def serialize_forest(nodes: Sequence[CommentNode]) -> list[dict[str, Any]]:
    """Render a forest as JSON-ready nested dicts.

    Walks the forest with an explicit stack, so the depth of a thread is not
    bounded by the interpreter recursion limit.

    Args:
        nodes: Top-level nodes of the forest

    Returns:
        One dict per node in ``CommentNodeResponse`` shape, children nested
    """
    forest: list[dict[str, Any]] = []
    stack = [(node, forest) for node in reversed(nodes)]
    while stack:
        node, siblings = stack.pop()
        item = _comment_json(node.comment)
        item["children"] = []
        siblings.append(item)
        stack.extend((child, item["children"]) for child in reversed(node.children))
    return forest
