"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import logfire
import pytest

from commenttree.domain.model import Comment
from commenttree.domain.value import CommentId, CommentStatus

# Keep telemetry local; instrumentation calls in the app need a configured
# logfire instance
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    text: str,
    parent: Optional[Comment] = None,
    minute: int = 0,
    status: CommentStatus = CommentStatus.ACTIVE,
) -> Comment:
    """Helper function to build comments with predictable timestamps.

    Args:
        text: Comment text
        parent: Parent comment for replies
        minute: Offset from a fixed base time, used for ordering
        status: Comment status

    Returns:
        Comment entity (not saved)
    """
    return Comment(
        id=CommentId(uuid4()),
        text=text,
        created_at=BASE_TIME + timedelta(minutes=minute),
        parent_id=parent.id if parent else None,
        status=status,
    )


@pytest.fixture(autouse=True)
def isolated_config(request, monkeypatch, tmp_path):
    """Run every test against an empty config directory.

    Tests that need specific settings write their own YAML document and
    point CONFIG_PATH at it. Integration tests keep the real configuration.
    """
    if request.node.get_closest_marker("integration"):
        return
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.yaml"))
    for name in ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB", "REDIS_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
