import uuid

import pytest
from fastapi import status
from sqlalchemy.ext.asyncio import async_sessionmaker

from solvinghub.data.repositories import (
    add_vote,
    adjust_problem_counter,
    get_problem_votes,
    get_vote,
    remove_vote,
)
from solvinghub.storage.models import Problem, ProblemVote, User


# Test vote toggle endpoint
def test_toggle_vote(client, test_problem, other_headers, test_db):
    url = f"/api/problems/{test_problem.id}/vote"

    response = client.post(url, headers=other_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"voted": True, "votes": 1}

    response = client.post(url, headers=other_headers)
    assert response.json() == {"voted": False, "votes": 0}

    response = client.post(url, headers=other_headers)
    assert response.json() == {"voted": True, "votes": 1}

    test_db.expire_all()
    assert test_db.get(Problem, test_problem.id).votes == 1
    assert test_db.query(ProblemVote).count() == 1


def test_toggle_vote_counts_each_user(client, test_problem, owner_headers, other_headers):
    url = f"/api/problems/{test_problem.id}/vote"

    client.post(url, headers=owner_headers)
    response = client.post(url, headers=other_headers)

    assert response.json() == {"voted": True, "votes": 2}


def test_toggle_vote_creates_profile(client, test_problem, headers_for, test_db):
    voter_id = uuid.uuid4()

    response = client.post(
        f"/api/problems/{test_problem.id}/vote",
        headers=headers_for(voter_id, email="voter@example.com"),
    )

    assert response.status_code == status.HTTP_200_OK
    assert test_db.get(User, voter_id) is not None


def test_toggle_vote_problem_not_found(client, other_headers):
    response = client.post(f"/api/problems/{uuid.uuid4()}/vote", headers=other_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "Problem not found"


def test_toggle_vote_requires_auth(client, test_problem):
    response = client.post(f"/api/problems/{test_problem.id}/vote")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_toggle_vote_invalid_token(client, test_problem):
    response = client.post(
        f"/api/problems/{test_problem.id}/vote",
        headers={"Authorization": "Bearer not-a-real-token"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] == "Invalid or expired token"


# Test vote state endpoint
def test_vote_state_anonymous(client, test_problem):
    response = client.get(f"/api/problems/{test_problem.id}/vote")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"voted": False}


def test_vote_state_authenticated(client, test_problem, other_user, other_headers, test_db):
    url = f"/api/problems/{test_problem.id}/vote"
    assert client.get(url, headers=other_headers).json() == {"voted": False}

    test_db.add(ProblemVote(user_id=other_user.id, problem_id=test_problem.id))
    test_db.commit()

    assert client.get(url, headers=other_headers).json() == {"voted": True}


def test_vote_state_bad_token_is_anonymous(client, test_problem):
    response = client.get(
        f"/api/problems/{test_problem.id}/vote",
        headers={"Authorization": "Bearer garbage"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"voted": False}


# Test vote repository
@pytest.mark.asyncio
async def test_add_vote_duplicate_returns_false(async_engine, test_problem, other_user, test_db):
    test_db.add(ProblemVote(user_id=other_user.id, problem_id=test_problem.id))
    test_db.commit()

    async_session = async_sessionmaker(bind=async_engine, expire_on_commit=False)
    async with async_session() as db:
        inserted = await add_vote(db, other_user.id, test_problem.id)
        votes = await get_problem_votes(db, test_problem.id)

    assert inserted is False
    assert votes == 0


@pytest.mark.asyncio
async def test_counter_never_goes_negative(async_engine, test_problem):
    async_session = async_sessionmaker(bind=async_engine, expire_on_commit=False)
    async with async_session() as db:
        await adjust_problem_counter(db, test_problem.id, "votes", -3)
        await db.commit()
        votes = await get_problem_votes(db, test_problem.id)

    assert votes == 0


@pytest.mark.asyncio
async def test_remove_same_vote_twice_keeps_counter(
    async_engine, test_problem, test_user, other_user, test_db
):
    problem_id = test_problem.id
    test_db.add(ProblemVote(user_id=test_user.id, problem_id=problem_id))
    test_db.add(ProblemVote(user_id=other_user.id, problem_id=problem_id))
    test_problem.votes = 2
    test_db.add(test_problem)
    test_db.commit()

    async_session = async_sessionmaker(bind=async_engine, expire_on_commit=False)
    async with async_session() as first, async_session() as second:
        vote_a = await get_vote(first, other_user.id, problem_id)
        vote_b = await get_vote(second, other_user.id, problem_id)

        assert await remove_vote(first, vote_a) is True
        assert await remove_vote(second, vote_b) is False
        votes = await get_problem_votes(second, problem_id)

    assert votes == 1
    test_db.expire_all()
    assert test_db.query(ProblemVote).count() == 1
