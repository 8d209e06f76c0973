# fileshare/models/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

# signed 64-bit, the widest integer primary key the backends accept
MAX_ID = 2**63 - 1


def make_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        # sessions are handed across FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine) -> None:
    # import models so they register on Base.metadata
    from fileshare.models import file, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
