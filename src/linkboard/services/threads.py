"""Rebuild a reply forest from a flat list of comments."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)


class ThreadedComment(Protocol):
    """Anything with an id and an optional parent id."""

    @property
    def id(self) -> Hashable: ...

    @property
    def parent_id(self) -> Hashable | None: ...


C = TypeVar("C", bound=ThreadedComment)


@dataclass
class CommentNode(Generic[C]):
    """A comment together with its direct replies."""

    comment: C
    replies: list[CommentNode[C]] = field(default_factory=list)


@dataclass
class Thread(Generic[C]):
    """Result of assembling a batch.

    ``roots`` are top-level comments. ``orphans`` are nodes whose parent id is
    not in the batch; they keep their own subtrees but are not reachable from
    ``roots``.
    """

    roots: list[CommentNode[C]]
    orphans: list[CommentNode[C]]


def assemble_thread(comments: Iterable[C]) -> Thread[C]:
    """Link comments to their parents in two passes.

    Input order is preserved among siblings. Deleted comments are kept as-is
    so their replies stay attached. Runs in O(n) time and space.
    """
    batch = list(comments)
    nodes: dict[Hashable, CommentNode[C]] = {c.id: CommentNode(comment=c) for c in batch}

    roots: list[CommentNode[C]] = []
    orphans: list[CommentNode[C]] = []
    for comment in batch:
        node = nodes[comment.id]
        if comment.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(comment.parent_id)
        if parent is None:
            orphans.append(node)
        else:
            parent.replies.append(node)

    if orphans:
        logger.warning(
            "Dropped %d comment(s) whose parent is missing from the batch: %s",
            len(orphans),
            [node.comment.id for node in orphans],
        )
    return Thread(roots=roots, orphans=orphans)


def build_tree(comments: Iterable[C]) -> list[CommentNode[C]]:
    """Return the root nodes of the reply forest; orphans are omitted."""
    return assemble_thread(comments).roots
