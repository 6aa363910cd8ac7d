def test_tables_listing(client):
    response = client.get("/dt/tables")
    assert response.status_code == 200
    names = [t["name"] for t in response.json()]
    assert names == ["users", "posts", "comments"]


def test_table_description(client):
    posts = client.get("/dt/tables/posts").json()
    assert posts["primary_key"] == "id"
    user_id = next(c for c in posts["columns"] if c["name"] == "userId")
    assert user_id["db_name"] == "user_id"
    assert user_id["references"] == {"table": "users", "column": "id"}

    assert client.get("/dt/tables/nope").status_code == 404


def test_relations_listing(client):
    relations = {r["table"]: r["relations"] for r in client.get("/dt/relations").json()}
    assert {(r["kind"], r["related_table"]) for r in relations["users"]} == {
        ("has_many", "posts"),
        ("has_many", "comments"),
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database_connected"] is True
    assert body["tables"] == 3


def test_ping(client):
    response = client.get("/health/ping")
    assert response.status_code == 200
    assert response.text == "pong"


def test_debug_level_prints_table_structure(engine, metadata, capsys):
    from conftest import make_client
    from tabula import ApiConfig

    config = ApiConfig(project_name="Verbose", log_level="DEBUG")
    with make_client(engine, metadata, config=config) as client:
        assert client.get("/health/ping").text == "pong"

    out = capsys.readouterr().out
    assert "userId" in out
    assert "has_many" in out
