# examples/main.py
"""
tabula demo: a small blog schema served with JSON-Server style routes.

Run with `python examples/main.py` and try
`/posts?_embed=user&_sort=-createdAt` or `/users?fullName_like=Ada`.
"""

from datetime import datetime

import uvicorn
from fastapi import FastAPI
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, create_engine
from sqlalchemy.pool import StaticPool

from tabula import ApiConfig, Endpoint, Hooks, TableOptions, Tabula

# ? Schema -----------------------------------------------------------------------------------

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("full_name", String(100), key="fullName", nullable=False),
    Column("email", String(200)),
)
posts = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(200), nullable=False),
    Column("content", Text),
    Column("user_id", Integer, key="userId"),
    Column("created_at", DateTime, key="createdAt", default=datetime.now),
)
comments = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("text", Text, nullable=False),
    Column("post_id", Integer, key="postId"),
    Column("user_id", Integer, key="userId"),
)

engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)


def seed() -> None:
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(users.insert(), [
            {"fullName": "Ada Lovelace", "email": "ada@example.com"},
            {"fullName": "Alan Turing", "email": "alan@example.com"},
        ])
        conn.execute(posts.insert(), [
            {"title": "Notes on the Analytical Engine", "userId": 1},
            {"title": "On Computable Numbers", "userId": 2},
            {"title": "Computing Machinery and Intelligence", "userId": 2},
        ])
        conn.execute(comments.insert(), [
            {"text": "A classic.", "postId": 2, "userId": 1},
        ])


# ? Hooks -----------------------------------------------------------------------------------


def no_anonymous_deletes(context) -> None:
    if context.operation is Endpoint.DELETE and context.user is None:
        raise PermissionError("Deleting comments requires a user")


# ? App -----------------------------------------------------------------------------------

app = FastAPI()

seed()
tabula = Tabula(
    config=ApiConfig(
        project_name="Blog API",
        version="0.1.0",
        description="JSON-Server compatible routes over a SQLite blog",
        debug_mode=True,
    ),
    engine=engine,
    schema=metadata,
    table_options={
        "users": TableOptions(disabled_endpoints={Endpoint.DELETE}),
        "comments": TableOptions(hooks=Hooks(before_operation=no_anonymous_deletes)),
    },
    app=app,
)
tabula.generate_all_routes()


if __name__ == "__main__":
    tabula.print_welcome(port=8000)
    uvicorn.run(app, host="127.0.0.1", port=8000)
