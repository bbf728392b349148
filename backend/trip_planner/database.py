import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./trip_planner.db")

_is_sqlite = DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
_echo = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

if _is_sqlite and ":memory:" not in DATABASE_URL:
    db_path = DATABASE_URL.replace("sqlite:///", "", 1)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

engine: Engine = create_engine(
    DATABASE_URL,
    echo=_echo,
    connect_args=_connect_args,
)


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Single transaction boundary for a mutating operation.

    Commits once when the block finishes. Any exception rolls the session back
    to the last committed state and is re-raised unchanged.
    """
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning("Transaction rolled back: %s", exc)
        raise


def init_db() -> None:
    """Initialize database - create all tables"""
    # Import all models to ensure they're registered with SQLModel metadata
    from trip_planner.models.chat_message import ChatMessage  # noqa: F401
    from trip_planner.models.member import Member  # noqa: F401
    from trip_planner.models.travel_attendee import TravelAttendee  # noqa: F401
    from trip_planner.models.travel_place import TravelPlace  # noqa: F401
    from trip_planner.models.travel_route import TravelRoute  # noqa: F401
    from trip_planner.models.travel_schedule import TravelSchedule  # noqa: F401

    SQLModel.metadata.create_all(engine)
