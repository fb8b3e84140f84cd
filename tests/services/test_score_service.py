# tests/services/test_score_service.py
"""Tests for the vote state machine and point accounting."""

import threading

import pytest
from sqlalchemy.exc import IntegrityError

from linkboard.core.errors import ConflictError, NotFoundError, ValidationError
from linkboard.models import Comment, Post, TargetKind, User, VoteRecord
from linkboard.repositories.vote_repo import VoteRepository
from linkboard.services.score_service import (
    VOTE_DOWN,
    VOTE_NONE,
    VOTE_UP,
    ScoreService,
    VoteOutcome,
    coerce_target_kind,
    plan_transition,
)


@pytest.mark.parametrize(
    ("current", "requested", "expected"),
    [
        (VOTE_NONE, VOTE_UP, (VOTE_UP, 1)),
        (VOTE_NONE, VOTE_DOWN, (VOTE_DOWN, -1)),
        (VOTE_UP, VOTE_UP, (VOTE_NONE, -1)),
        (VOTE_UP, VOTE_DOWN, (VOTE_DOWN, -2)),
        (VOTE_DOWN, VOTE_UP, (VOTE_UP, 2)),
        (VOTE_DOWN, VOTE_DOWN, (VOTE_NONE, 1)),
    ],
)
def test_plan_transition_table(current, requested, expected) -> None:
    assert plan_transition(current, requested) == expected


def test_coerce_target_kind() -> None:
    assert coerce_target_kind("comment") is TargetKind.COMMENT
    assert coerce_target_kind(TargetKind.POST) is TargetKind.POST
    with pytest.raises(ValidationError):
        coerce_target_kind("user")


@pytest.fixture
def scores(db_session) -> ScoreService:
    return ScoreService(db_session)


class TestCastVote:
    def test_example_sequence(self, scores, test_user, test_post) -> None:
        """UP, UP again, DOWN, UP walks through every kind of transition."""
        assert scores.cast_vote(test_user.id, test_post.id, "post", 1) == VoteOutcome(1, 1)
        assert scores.cast_vote(test_user.id, test_post.id, "post", 1) == VoteOutcome(0, 0)
        assert scores.cast_vote(test_user.id, test_post.id, "post", -1) == VoteOutcome(-1, -1)
        assert scores.cast_vote(test_user.id, test_post.id, "post", 1) == VoteOutcome(1, 1)

    def test_toggle_off_deletes_record(self, scores, db_session, test_user, test_post) -> None:
        scores.cast_vote(test_user.id, test_post.id, "post", -1)
        scores.cast_vote(test_user.id, test_post.id, "post", -1)

        assert VoteRepository(db_session).get(test_user.id, TargetKind.POST, test_post.id) is None
        assert scores.get_user_vote(test_user.id, test_post.id, "post") == VOTE_NONE

    def test_flip_updates_record_in_place(self, scores, db_session, test_user, test_post) -> None:
        scores.cast_vote(test_user.id, test_post.id, "post", 1)
        record_id = VoteRepository(db_session).get(test_user.id, TargetKind.POST, test_post.id).id

        scores.cast_vote(test_user.id, test_post.id, "post", -1)
        record = VoteRepository(db_session).get(test_user.id, TargetKind.POST, test_post.id)
        assert record.id == record_id
        assert record.direction == -1

    def test_points_match_ledger_across_voters(
        self, scores, db_session, user_factory, test_post
    ) -> None:
        voters = [user_factory(f"voter{i}") for i in range(4)]
        for voter, direction in zip(voters, (1, 1, -1, 1)):
            scores.cast_vote(voter.id, test_post.id, "post", direction)
        scores.cast_vote(voters[0].id, test_post.id, "post", 1)
        scores.cast_vote(voters[2].id, test_post.id, "post", 1)

        repo = VoteRepository(db_session)
        db_session.refresh(test_post)
        assert test_post.points == repo.sum_for_target(TargetKind.POST, test_post.id) == 3
        assert repo.count_for_target(TargetKind.POST, test_post.id) == 3

    def test_comment_votes_are_separate_from_post_votes(
        self, scores, db_session, test_user, test_post, test_comment
    ) -> None:
        outcome = scores.cast_vote(test_user.id, test_comment.id, TargetKind.COMMENT, -1)
        assert outcome == VoteOutcome(-1, -1)

        db_session.refresh(test_post)
        assert test_post.points == 0
        assert scores.get_user_vote(test_user.id, test_post.id, "post") == VOTE_NONE
        assert scores.get_user_vote(test_user.id, test_comment.id, "comment") == VOTE_DOWN

    def test_missing_target_rolls_back_vote(self, scores, db_session, test_user) -> None:
        with pytest.raises(NotFoundError, match="Post not found"):
            scores.cast_vote(test_user.id, 9999, "post", 1)
        assert VoteRepository(db_session).get(test_user.id, TargetKind.POST, 9999) is None

    def test_missing_comment_target(self, scores, test_user) -> None:
        with pytest.raises(NotFoundError, match="Comment not found"):
            scores.cast_vote(test_user.id, 9999, "comment", -1)

    @pytest.mark.parametrize(
        ("target_id", "kind", "direction"),
        [
            (0, "post", 1),
            (-3, "post", 1),
            (True, "post", 1),
            (1, "user", 1),
            (1, "post", 0),
            (1, "post", 2),
            (1, "post", True),
        ],
    )
    def test_invalid_requests(self, scores, test_user, test_post, target_id, kind, direction) -> None:
        with pytest.raises(ValidationError):
            scores.cast_vote(test_user.id, target_id, kind, direction)


def test_concurrent_votes_from_many_voters_are_all_counted(file_sessionmaker) -> None:
    """No increment is lost when distinct voters vote at the same time."""
    voters = 10
    with file_sessionmaker() as setup:
        users = [
            User(username=f"voter{i}", email=f"voter{i}@example.com", password_hash="x")
            for i in range(voters)
        ]
        setup.add_all(users)
        setup.flush()
        post = Post(title="Hot take", text="Discuss.", kind="text", author_id=users[0].id)
        setup.add(post)
        setup.commit()
        user_ids = [user.id for user in users]
        post_id = post.id

    barrier = threading.Barrier(voters)
    errors: list[BaseException] = []

    def vote(user_id: int, direction: int) -> None:
        db = file_sessionmaker()
        try:
            barrier.wait()
            ScoreService(db).cast_vote(user_id, post_id, "post", direction)
        except Exception as exc:  # surfaced by the assertion below
            errors.append(exc)
        finally:
            db.close()

    directions = [1] * 7 + [-1] * 3
    threads = [
        threading.Thread(target=vote, args=(user_id, direction))
        for user_id, direction in zip(user_ids, directions)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with file_sessionmaker() as check:
        assert check.get(Post, post_id).points == 4
        assert VoteRepository(check).count_for_target(TargetKind.POST, post_id) == voters


def test_vote_records_are_unique_per_voter_and_target(db_session, test_user, test_post) -> None:
    db_session.add(VoteRecord(voter_id=test_user.id, target_id=test_post.id, target_kind="post", direction=1))
    db_session.commit()
    db_session.add(VoteRecord(voter_id=test_user.id, target_id=test_post.id, target_kind="post", direction=-1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_comment_points_only_change_by_votes(scores, db_session, test_user, other_user, test_comment) -> None:
    scores.cast_vote(test_user.id, test_comment.id, "comment", 1)
    scores.cast_vote(other_user.id, test_comment.id, "comment", 1)

    refreshed = db_session.get(Comment, test_comment.id)
    db_session.refresh(refreshed)
    assert refreshed.points == 2


def test_duplicate_first_vote_becomes_conflict(file_sessionmaker, monkeypatch) -> None:
    """A first vote that loses to a row committed by another session maps to ConflictError."""
    with file_sessionmaker() as setup:
        voter = User(username="twice", email="twice@example.com", password_hash="x")
        setup.add(voter)
        setup.flush()
        post = Post(title="Contested", text="body", kind="text", author_id=voter.id)
        setup.add(post)
        setup.commit()
        voter_id, post_id = voter.id, post.id

    # The other session records the vote and its point without this one seeing it first.
    with file_sessionmaker() as winner:
        ScoreService(winner).cast_vote(voter_id, post_id, "post", 1)

    db = file_sessionmaker()
    try:
        loser = ScoreService(db)
        monkeypatch.setattr(loser.votes, "get", lambda *args: None)

        with pytest.raises(ConflictError, match="Vote already in progress"):
            loser.cast_vote(voter_id, post_id, "post", 1)
    finally:
        db.close()

    with file_sessionmaker() as check:
        assert check.get(Post, post_id).points == 1
        assert VoteRepository(check).count_for_target(TargetKind.POST, post_id) == 1
