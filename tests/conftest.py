import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from main import app
from leaguehub.config import SESSION_COOKIE_NAME
from leaguehub.database import get_session
from leaguehub.models import User, Game
from leaguehub.services.auth import create_session, hash_password
from leaguehub.services.images import ImageHost, get_image_host

# Create in-memory database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="image_host")
def image_host_fixture(tmp_path):
    return ImageHost("https://images.test/demo", tmp_path / "media")


@pytest.fixture(name="client")
def client_fixture(session: Session, image_host: ImageHost):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_image_host] = lambda: image_host
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def create_user(session: Session, email: str = "test@example.com", display_name: str = "Test User") -> User:
    user = User(
        email=email,
        display_name=display_name,
        password_hash=hash_password("password123")
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def login(client: TestClient, session: Session, user: User) -> None:
    """Point the client's session cookie at the given user."""
    client.cookies.set(SESSION_COOKIE_NAME, create_session(session, user.id))


def create_games(session: Session, count: int) -> list[Game]:
    games = [Game(home_team=f"Home {i}", away_team=f"Away {i}") for i in range(count)]
    session.add_all(games)
    session.commit()
    for game in games:
        session.refresh(game)
    return games


@pytest.fixture(name="user")
def user_fixture(session: Session) -> User:
    return create_user(session)


@pytest.fixture(name="logged_client")
def logged_client_fixture(client: TestClient, session: Session, user: User) -> TestClient:
    login(client, session, user)
    return client
