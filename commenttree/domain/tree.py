"""Comment tree algebra.

Pure functions that turn flat comment pages into ordered forests and prune
forests by text. Both walk the input with an explicit stack, so deep reply
chains do not hit the interpreter recursion limit.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from commenttree.domain.model import Comment
from commenttree.domain.value import CommentId


@dataclass
class CommentNode:
    """Node in a comment forest.

    Wraps a comment and its replies. Children keep the order in which their
    comments appeared in the flat input.
    """

    comment: Comment
    children: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def text(self) -> str:
        return self.comment.text

    def walk(self) -> Iterable["CommentNode"]:
        """Yield this node and all of its descendants, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def build_forest(
    flat: Sequence[Comment], parent_id: Optional[CommentId] = None
) -> list[CommentNode]:
    """Build the ordered forest hanging off ``parent_id``.

    Selects the comments whose ``parent_id`` equals the given parent (None
    matches root comments) and attaches their descendants level by level.
    Comments whose ancestry does not reach ``parent_id`` are left out; every
    comment appears at most once.

    Args:
        flat: Comments in the order they should be presented
        parent_id: Parent the forest hangs off

    Returns:
        Top-level nodes of the forest
    """
    replies: dict[Optional[CommentId], list[Comment]] = defaultdict(list)
    for comment in flat:
        replies[comment.parent_id].append(comment)

    forest: list[CommentNode] = []
    placed: set[CommentId] = set()
    stack: list[tuple[Optional[CommentId], list[CommentNode]]] = [(parent_id, forest)]
    while stack:
        key, siblings = stack.pop()
        for comment in replies.get(key, ()):
            if comment.id in placed:
                continue
            placed.add(comment.id)
            node = CommentNode(comment)
            siblings.append(node)
            stack.append((comment.id, node.children))
    return forest


@dataclass
class _Visit:
    node: CommentNode
    into: list[CommentNode]
    kept: list[CommentNode] = field(default_factory=list)
    entered: bool = False


def filter_forest(nodes: Sequence[CommentNode], query: str) -> list[CommentNode]:
    """Keep the nodes matching ``query`` together with all their ancestors.

    A node survives when its text contains the query (case-insensitive) or
    when at least one of its descendants survives. Surviving nodes carry only
    their surviving children. The input forest is not modified.

    Args:
        nodes: Forest to filter
        query: Substring to look for

    Returns:
        Filtered forest, in input order
    """
    needle = query.lower()
    filtered: list[CommentNode] = []
    stack = [_Visit(node, filtered) for node in reversed(nodes)]
    while stack:
        visit = stack[-1]
        if not visit.entered:
            # Children are decided first so their results are known on exit
            visit.entered = True
            stack.extend(_Visit(child, visit.kept) for child in reversed(visit.node.children))
            continue
        stack.pop()
        if visit.kept or needle in visit.node.text.lower():
            visit.into.append(CommentNode(visit.node.comment, visit.kept))
    return filtered
