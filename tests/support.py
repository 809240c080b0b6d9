from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from professor_aid.database import init_db
from professor_aid.services import identity as identity_service
from professor_aid.services.repository import CallerContext, Repository
from professor_aid.utils.logging import setup_testing_logging

PASSWORD = "segredo123"

setup_testing_logging()


def make_sessionmaker():
    """Fresh in-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def sign_up(db, email, full_name="Maria Silva"):
    session = identity_service.sign_up(db, email, PASSWORD, full_name)
    return CallerContext(identity_id=session.user_id, token=session.token)


def repo_for(db, caller):
    return Repository(db, caller)
