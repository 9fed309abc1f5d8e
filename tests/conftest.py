# Set environment variables before the application is imported
import os

os.environ["TESTING"] = "True"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256")
os.environ.setdefault("PAGINATION_STRATEGY", "offset")

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from solvinghub.config import Config, logger
from solvinghub.data.repositories import get_session
from solvinghub.main import app
from solvinghub.storage.models import Comment, Problem, Reply, User

DESCRIPTION = (
    "Households in the district have no reliable way to sort recyclable "
    "waste, so most of it ends up in landfill."
)


# File-backed SQLite so the sync test session and the async app share data
@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(
        f"sqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(bind=engine)
    yield engine
    SQLModel.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def async_engine(db_path, sync_engine):
    return create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)


# Test database session for seeding and assertions
@pytest.fixture
def test_db(sync_engine):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=sync_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Create test client
@pytest.fixture
def client(async_engine):
    async_session = async_sessionmaker(bind=async_engine, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_token(user_id, email=None, name=None, expires_in=timedelta(hours=1), **extra):
    payload = {
        "sub": str(user_id),
        "aud": Config.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "email": email,
        "user_metadata": {"full_name": name} if name else {},
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    payload.update(extra)
    return jwt.encode(payload, Config.SUPABASE_JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def auth_headers(user_id, **kwargs):
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


# Create a test user
@pytest.fixture
def test_user(test_db):
    user = User(
        id=uuid.uuid4(),
        email="owner@example.com",
        display_name="Problem Owner",
        reputation=12,
    )
    test_db.add(user)
    test_db.commit()
    return user


@pytest.fixture
def other_user(test_db):
    user = User(id=uuid.uuid4(), email="other@example.com", display_name="Someone Else")
    test_db.add(user)
    test_db.commit()
    return user


@pytest.fixture
def owner_headers(test_user):
    return auth_headers(test_user.id, email=test_user.email, name=test_user.display_name)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user.id, email=other_user.email)


@pytest.fixture
def make_problem(test_db, test_user):
    """Factory that inserts problems with strictly increasing created_at."""
    base_time = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "title": f"Problem number {counter['n']:03d} needs a fix",
            "description": DESCRIPTION,
            "category": "Environment",
            "tags": ["waste"],
            "impacts": ["landfill growth"],
            "challenges": ["no sorting bins"],
            "user_id": test_user.id,
            "created_at": base_time + timedelta(minutes=counter["n"]),
            "updated_at": base_time + timedelta(minutes=counter["n"]),
        }
        data.update(overrides)
        problem = Problem(**data)
        test_db.add(problem)
        test_db.commit()
        return problem

    return _make


@pytest.fixture
def test_problem(make_problem):
    return make_problem(title="Recycling is not sorted in our town")


@pytest.fixture
def test_thread(test_db, test_problem, test_user, other_user):
    """A comment by other_user with one reply by the problem owner."""
    comment = Comment(
        problem_id=test_problem.id, user_id=other_user.id, text="Have you asked the council?"
    )
    test_db.add(comment)
    test_db.commit()
    reply = Reply(
        comment_id=comment.id,
        problem_id=test_problem.id,
        user_id=test_user.id,
        text="Yes, twice.",
    )
    test_db.add(reply)
    test_problem.discussions = 2
    test_db.add(test_problem)
    test_db.commit()
    return comment, reply


# Disable logging during tests
@pytest.fixture(autouse=True)
def disable_logging():
    logger.disabled = True
    yield
    logger.disabled = False


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def token_for():
    return make_token
