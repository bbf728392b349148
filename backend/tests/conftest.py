import os

# Keep the application engine off disk; tests use test_engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from trip_planner.database import get_session  # noqa: E402
from trip_planner.main import app  # noqa: E402
from trip_planner.models.member import Member  # noqa: E402
from trip_planner.models.travel_place import TravelPlace  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. Use sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. All models MUST be imported before create_all() (see session_fixture)
# 4. App dependency overridden to use test_engine (see client_fixture)
# 5. Tables are dropped after every test so ids restart at 1
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

DEFAULT_AREA = {"country": "대한민국", "city": "서울", "district": "중구"}


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a fresh schema"""
    # Import all models to ensure they're registered BEFORE create_all
    import trip_planner.models  # noqa: F401

    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place for the
    entire duration, so the app never uses its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


def make_member(session: Session, user_id: str, nickname: str = None) -> Member:
    member = Member(
        user_id=user_id,
        nickname=nickname or user_id.capitalize(),
        email=f"{user_id}@example.com",
        profile_image_url=f"https://img.example.com/{user_id}.png",
    )
    session.add(member)
    session.commit()
    session.refresh(member)
    return member


def make_place(session: Session, place_name: str, thumbnail_url: str = None, **area) -> TravelPlace:
    location = {**DEFAULT_AREA, **area}
    place = TravelPlace(
        place_name=place_name,
        address=f"{location['city']} {location['district']} {place_name}-ro 1",
        thumbnail_url=thumbnail_url,
        **location,
    )
    session.add(place)
    session.commit()
    session.refresh(place)
    return place


@pytest.fixture
def members(session: Session):
    """alice, bob and carol, all registered"""
    return {user_id: make_member(session, user_id) for user_id in ("alice", "bob", "carol")}


@pytest.fixture
def places(session: Session):
    """Three places in the default area plus one in Busan"""
    return {
        "tower": make_place(session, "N Seoul Tower", thumbnail_url="https://img.example.com/tower.jpg"),
        "market": make_place(session, "Namdaemun Market"),
        "palace": make_place(session, "Deoksugung", thumbnail_url="https://img.example.com/palace.jpg"),
        "beach": make_place(session, "Haeundae Beach", city="부산", district="해운대구"),
    }
