# tests/services/test_matching_service.py
"""Service-level tests for match lifecycle rules."""

import pytest

from matchai.core.errors import AuthorizationError, NotFoundError, ValidationError
from matchai.core.settings import settings
from matchai.models import Match
from matchai.schemas.ai import Compatibility
from matchai.services import matching


@pytest.mark.asyncio
async def test_create_commits_before_scoring(db_session, test_user, other_user, mocker) -> None:
    seen: dict[str, object] = {}

    async def score(user, other):
        row = db_session.query(Match).one()
        seen["score_at_call"] = row.compatibility_score
        return Compatibility(score=64, reasons=["ok"])

    ai = mocker.Mock()
    ai.score_compatibility = mocker.AsyncMock(side_effect=score)

    match, reasons = await matching.create_match(
        db_session, ai, caller_id=test_user.id,
        user_id_1=test_user.id, user_id_2=other_user.id, status="pending",
    )

    assert seen["score_at_call"] is None
    assert match.compatibility_score == 64
    assert reasons == ["ok"]


@pytest.mark.asyncio
async def test_create_validates_status_first(db_session, mocker) -> None:
    ai = mocker.Mock()
    with pytest.raises(ValidationError, match="Invalid status"):
        await matching.create_match(
            db_session, ai, caller_id=1, user_id_1=2, user_id_2=3, status="bogus"
        )


def test_transition_checks_existence_before_status(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        matching.transition_match(db_session, caller_id=test_user.id, match_id=123, status="bogus")


def test_transition_checks_participation_before_status(db_session, test_match, third_user) -> None:
    with pytest.raises(AuthorizationError):
        matching.transition_match(
            db_session, caller_id=third_user.id, match_id=test_match.id, status="bogus"
        )


def test_reciprocal_policy_allows_other_transitions(db_session, test_match, test_user, monkeypatch) -> None:
    monkeypatch.setattr(settings, "match_status_policy", "reciprocal")

    result = matching.transition_match(
        db_session, caller_id=test_user.id, match_id=test_match.id, status="rejected"
    )
    assert result.status == "rejected"


def test_find_pair_is_symmetric(db_session, test_match, test_user, other_user, third_user) -> None:
    assert matching.find_pair(db_session, other_user.id, test_user.id).id == test_match.id
    assert matching.find_pair(db_session, test_user.id, third_user.id) is None


def test_potential_matches_for_unknown_user(db_session, test_user) -> None:
    assert matching.list_potential_matches(db_session, 8888) == []
