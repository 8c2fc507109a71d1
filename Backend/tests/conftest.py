"""Shared fixtures: an in-memory database, the app wired to it, and factories."""

import os

# Settings are read at import time, so the environment comes first.
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_PRIVATE_KEY", "test-jwt-secret-0123456789abcdef0123456789abcdef")
os.environ.setdefault("JWT_PUBLIC_KEY", "test-jwt-secret-0123456789abcdef0123456789abcdef")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["OPENAI_API_KEY"] = ""

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobswipe.models  # noqa: F401
from jobswipe.db.base import Base
from jobswipe.db.session import get_db, get_session_factory
from jobswipe.main import app
from jobswipe.models import Company, Job, Subscription, User, Role, Plan
from jobswipe.security.jwt import issue_jwt
from jobswipe.services.ai import SuggestionClient, get_suggestion_client


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def suggestion_client():
    # No API key: the static opening lines
    return SuggestionClient(api_key=None, model="test-model", timeout=1.0)


@pytest.fixture
def wired_app(session_factory, suggestion_client):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_suggestion_client] = lambda: suggestion_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(wired_app):
    with TestClient(wired_app) as client:
        yield client


@pytest.fixture
def client_for(wired_app):
    """Returns a function giving a TestClient signed in as the given user."""
    clients = []

    def make(user: User) -> TestClient:
        token = issue_jwt(sub=str(user.id), role=user.role)
        client = TestClient(wired_app, cookies={"access_token": token})
        clients.append(client)
        return client

    yield make
    for client in clients:
        client.close()


@pytest.fixture
def make_user(db):
    def make(
        role: Role = Role.JOBSEEKER,
        plan: Plan = Plan.FREE,
        swipes: int = 50,
        super_likes: int = 5,
        skills=None,
        company: Company = None,
        name: str = None,
        with_subscription: bool = True,
    ) -> User:
        user = User(
            email=f"{uuid.uuid4().hex[:10]}@example.com",
            name=name or f"{role.value.title()} {uuid.uuid4().hex[:4]}",
            role=role.value,
            skills=skills or [],
            company_id=company.id if company else None,
        )
        db.add(user)
        db.flush()
        if with_subscription:
            db.add(Subscription(
                user_id=user.id,
                plan=plan.value,
                swipes_remaining=swipes,
                super_likes_remaining=super_likes,
            ))
        db.commit()
        db.refresh(user)
        return user

    return make


@pytest.fixture
def make_company(db):
    def make(name: str = "Acme Robotics") -> Company:
        company = Company(name=name, slug=f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:6]}")
        db.add(company)
        db.commit()
        db.refresh(company)
        return company

    return make


@pytest.fixture
def make_job(db):
    def make(poster: User, title: str = "Backend Engineer", skills=None, **fields) -> Job:
        job = Job(
            title=title,
            description="Build and run the services behind our product. " * 2,
            skills=skills or [],
            poster_id=poster.id,
            company_id=poster.company_id,
            **fields,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return make


@pytest.fixture
def recruiter(make_company, make_user):
    company = make_company()
    return make_user(role=Role.RECRUITER, plan=Plan.BUSINESS, swipes=999, company=company, name="Rita Recruiter")


@pytest.fixture
def seeker(make_user):
    return make_user(name="Sam Seeker", skills=["python", "sql"])


@pytest.fixture
def job(make_job, recruiter):
    return make_job(recruiter, skills=["python", "postgres"])
