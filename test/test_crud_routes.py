import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table

from conftest import make_client, seed
from tabula import ApiConfig, Endpoint, TableOptions


def ids(response):
    return [row["id"] for row in response.json()]


def test_default_page_and_total_count(many_users, client):
    response = client.get("/users")
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "15"
    assert ids(response) == list(range(1, 11))


def test_page_parameters(many_users, client):
    response = client.get("/users", params={"_page": 2, "_per_page": 10})
    assert ids(response) == [11, 12, 13, 14, 15]
    assert response.headers["X-Total-Count"] == "15"


def test_range_parameters(many_users, client):
    response = client.get("/users?_start=2&_end=5&_page=1&_per_page=50")
    assert ids(response) == [3, 4, 5]

    response = client.get("/users?_start=12&_limit=10")
    assert ids(response) == [13, 14, 15]


def test_out_of_range_page_is_empty(many_users, client):
    response = client.get("/users?_page=9")
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "15"


def test_sort_descending_and_bogus_sort_ignored(many_users, client):
    assert ids(client.get("/users?_sort=-id&_per_page=3")) == [15, 14, 13]
    assert ids(client.get("/users?_sort=bogus&_per_page=3")) == [1, 2, 3]


def test_filters_narrow_total_count(blog, client):
    response = client.get("/posts?userId=1,2")
    assert sorted(ids(response)) == [1, 2]
    assert response.headers["X-Total-Count"] == "2"

    assert ids(client.get("/posts?id_gte=2&id_lte=2")) == [2]
    assert sorted(ids(client.get("/posts?userId_ne=1"))) == [2]
    assert ids(client.get("/posts?createdAt_gte=2024-02-15")) == [3]


def test_like_is_case_sensitive(blog, client):
    assert ids(client.get("/posts?title_like=ngin")) == [1]
    assert ids(client.get("/posts?title_like=NGIN")) == []
    assert ids(client.get("/posts?title_like=%25")) == []


def test_invalid_filter_values_are_ignored(blog, client):
    response = client.get("/posts?id=abc&unknown=1")
    assert response.headers["X-Total-Count"] == "3"


def test_embed_over_http(blog, client):
    response = client.get("/posts?_embed=user&_sort=id")
    body = response.json()
    assert body[0]["user"]["fullName"] == "Ada Lovelace"
    assert body[2]["user"] is None

    response = client.get("/users?_embed=posts,comments&_sort=id")
    ada, alan = response.json()
    assert [p["id"] for p in ada["posts"]] == [1]
    assert [c["text"] for c in alan["comments"]] == ["Brilliant"]


def test_get_one(blog, client):
    response = client.get("/users/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "fullName": "Ada Lovelace", "phone": "555-0101"}

    assert client.get("/users/99").status_code == 404
    assert client.get("/users/not-a-number").status_code == 404


def test_create(client):
    response = client.post("/users", json={"fullName": "Grace Hopper"})
    assert response.status_code == 201
    created = response.json()
    assert created["fullName"] == "Grace Hopper"
    assert created["phone"] is None
    assert client.get(f"/users/{created['id']}").status_code == 200


def test_create_validation_error(client):
    response = client.post("/users", json={"phone": "555"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"]


def test_update_and_replace(blog, client):
    response = client.patch("/users/2", json={"phone": "555-0202"})
    assert response.status_code == 200
    assert response.json() == {"id": 2, "fullName": "Alan Turing", "phone": "555-0202"}

    response = client.put("/users/2", json={"fullName": "A. M. Turing"})
    assert response.status_code == 200
    assert response.json() == {"id": 2, "fullName": "A. M. Turing", "phone": "555-0202"}

    response = client.put("/users/2", json={"fullName": "Alan Turing", "phone": None})
    assert response.json()["phone"] is None

    assert client.put("/users/2", json={"phone": "1"}).status_code == 400

    assert client.patch("/users/99", json={"phone": "1"}).status_code == 404
    assert client.put("/users/99", json={"fullName": "x"}).status_code == 404


def test_delete(blog, client):
    response = client.delete("/comments/2")
    assert response.status_code == 204
    assert client.get("/comments/2").status_code == 404
    assert client.delete("/comments/2").status_code == 404


def test_disabled_endpoints(engine, metadata):
    options = {
        "users": TableOptions(disabled_endpoints={Endpoint.DELETE, Endpoint.CREATE})
    }
    with make_client(engine, metadata, table_options=options) as client:
        assert client.get("/users").status_code == 200
        assert client.post("/users", json={"fullName": "x"}).status_code == 405
        assert client.delete("/users/1").status_code == 405
        assert client.post("/posts", json={"title": "still on"}).status_code == 201


def test_prefix(engine, metadata):
    config = ApiConfig(project_name="Prefixed", prefix="/api")
    with make_client(engine, metadata, config=config) as client:
        assert client.get("/api/users").status_code == 200
        assert client.get("/api/dt/tables").status_code == 200
        assert client.get("/users").status_code == 404


def test_store_failure_is_500(engine, metadata):
    with make_client(engine, metadata, raise_server_exceptions=False) as client:
        metadata.tables["users"].drop(engine)
        response = client.get("/users")
    assert response.status_code == 500
    assert response.json()["error"] == "Internal Server Error"


@pytest.mark.parametrize("header", ["abc-123", None])
def test_request_id_header(client, header):
    headers = {"X-Request-ID": header} if header else {}
    response = client.get("/users", headers=headers)
    request_id = response.headers["X-Request-ID"]
    assert request_id
    if header:
        assert request_id == header


def test_replace_keeps_omitted_defaulted_columns(engine):
    metadata = MetaData()
    Table(
        "items",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String(50), nullable=False),
        Column("status", String(20), nullable=False, server_default="draft"),
    )
    metadata.create_all(engine)

    with make_client(engine, metadata) as client:
        created = client.post("/items", json={"name": "a"}).json()
        assert created["status"] == "draft"

        response = client.put(f"/items/{created['id']}", json={"name": "b"})
        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "name": "b", "status": "draft"}


@pytest.mark.parametrize(
    "query, expected",
    [
        ("_start=3&_end=7", [4, 5, 6, 7]),
        ("_page=2&_per_page=5", [6, 7, 8, 9, 10]),
        ("_start=13&_limit=5", [14, 15]),
    ],
)
def test_pagination_windows(many_users, client, query, expected):
    response = client.get(f"/users?{query}")
    assert ids(response) == expected
    assert response.headers["X-Total-Count"] == "15"


@pytest.mark.parametrize(
    "query",
    [
        "_page=99999999999999999999",
        "_start=99999999999999999999&_end=99999999999999999999999",
        "_page=" + "1" * 5000 + "x",
    ],
)
def test_oversized_pagination_degrades(many_users, client, query):
    response = client.get(f"/users?{query}")
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "15"


@pytest.mark.parametrize("query", ["id=99999999999999999999", "id_gte=-99999999999999999999"])
def test_oversized_integer_filter_is_dropped(many_users, client, query):
    response = client.get(f"/users?{query}")
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "15"


def test_oversized_path_id_is_404(many_users, client):
    assert client.get("/users/99999999999999999999").status_code == 404


@pytest.fixture
def named_users(engine, metadata):
    seed(engine, metadata, "users", [
        {"id": 1, "fullName": "Carol"},
        {"id": 2, "fullName": "Alice"},
        {"id": 3, "fullName": "Bob"},
        {"id": 4, "fullName": "Malik"},
    ])
    return engine


def test_unknown_sort_field_is_skipped(named_users, client):
    with_bogus = client.get("/users?_sort=bogus,fullName").json()
    assert with_bogus == client.get("/users?_sort=fullName").json()
    assert [u["fullName"] for u in with_bogus] == ["Alice", "Bob", "Carol", "Malik"]


def test_descending_sort_reverses_ascending(named_users, client):
    ascending = ids(client.get("/users?_sort=fullName"))
    descending = ids(client.get("/users?_sort=-fullName"))
    assert descending == list(reversed(ascending))


@pytest.mark.parametrize(
    "needle, expected",
    [("Ali", [2]), ("ali", [4]), ("ALI", []), ("o", [1, 3])],
)
def test_like_matches_case_sensitively(named_users, client, needle, expected):
    response = client.get("/users", params={"fullName_like": needle, "_sort": "id"})
    assert ids(response) == expected
