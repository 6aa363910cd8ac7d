from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.pool import StaticPool

from tabula import ApiConfig, Tabula, extract_tables


def build_metadata() -> MetaData:
    metadata = MetaData()
    Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("full_name", String(100), key="fullName", nullable=False),
        Column("phone", String(30)),
    )
    Table(
        "posts",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(200), nullable=False),
        Column("content", Text),
        Column("user_id", Integer, key="userId"),
        Column("created_at", DateTime, key="createdAt"),
    )
    Table(
        "comments",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("text", Text, nullable=False),
        Column("post_id", Integer, key="postId"),
        Column("user_id", Integer, key="userId"),
    )
    return metadata


@pytest.fixture
def metadata():
    return build_metadata()


@pytest.fixture
def engine(metadata):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def tables(metadata):
    return {t.name: t for t in extract_tables(metadata)}


def seed(engine, metadata, table_name, rows):
    with engine.begin() as conn:
        conn.execute(metadata.tables[table_name].insert(), rows)


@pytest.fixture
def blog(engine, metadata):
    """Two users, three posts (one orphaned), two comments."""
    seed(engine, metadata, "users", [
        {"id": 1, "fullName": "Ada Lovelace", "phone": "555-0101"},
        {"id": 2, "fullName": "Alan Turing", "phone": None},
    ])
    seed(engine, metadata, "posts", [
        {"id": 1, "title": "Engines", "content": "Analytical", "userId": 1,
         "createdAt": datetime(2024, 1, 1)},
        {"id": 2, "title": "Machines", "content": "Computable", "userId": 2,
         "createdAt": datetime(2024, 2, 1)},
        {"id": 3, "title": "Orphan", "content": None, "userId": None,
         "createdAt": datetime(2024, 3, 1)},
    ])
    seed(engine, metadata, "comments", [
        {"id": 1, "text": "Brilliant", "postId": 1, "userId": 2},
        {"id": 2, "text": "Agreed", "postId": 1, "userId": 1},
    ])
    return engine


@pytest.fixture
def many_users(engine, metadata):
    seed(engine, metadata, "users", [
        {"id": i, "fullName": f"User {i:02d}", "phone": None} for i in range(1, 16)
    ])
    return engine


def make_client(engine, metadata, **kwargs) -> TestClient:
    config = kwargs.pop("config", None) or ApiConfig(project_name="Test API")
    raise_server_exceptions = kwargs.pop("raise_server_exceptions", True)
    app = Tabula(config, engine, metadata, **kwargs).generate_all_routes()
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture
def client(engine, metadata):
    with make_client(engine, metadata) as test_client:
        yield test_client
