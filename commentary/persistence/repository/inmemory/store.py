"""Shared state of the in-memory repositories."""

import asyncio
import itertools
from collections import defaultdict

from commentary.domain.model import Comment, NotificationQueueEntry, Vote
from commentary.domain.value import CommentId, QueueEntryId, VoteId


class InMemoryStore:
    """Tables of the in-memory repositories.

    Repositories built on the same store see each other's writes, the way
    PostgreSQL repositories share one database. Deleting a comment through
    the store cascades to its votes and queue entries.
    """

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.votes: dict[VoteId, Vote] = {}
        self.queue: dict[QueueEntryId, NotificationQueueEntry] = {}
        self.locks: defaultdict[CommentId, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._comment_ids = itertools.count(1)
        self._vote_ids = itertools.count(1)
        self._queue_ids = itertools.count(1)

    def next_comment_id(self) -> CommentId:
        return CommentId(next(self._comment_ids))

    def next_vote_id(self) -> VoteId:
        return VoteId(next(self._vote_ids))

    def next_queue_id(self) -> QueueEntryId:
        return QueueEntryId(next(self._queue_ids))

    def delete_comment(self, comment_id: CommentId) -> None:
        self.comments.pop(comment_id, None)
        self.locks.pop(comment_id, None)
        self.votes = {
            key: vote
            for key, vote in self.votes.items()
            if vote.comment_id != comment_id
        }
        self.queue = {
            key: entry
            for key, entry in self.queue.items()
            if entry.triggering_comment_id != comment_id
        }
