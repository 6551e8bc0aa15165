"""
Tests for the FastAPI application and GraphQL endpoint
"""

import pytest
from fastapi.testclient import TestClient

from moviegraph.api.app import create_app

ALADDIN_QUERY = '{ movie(id: "naeeurehnin") { title actor { name } } }'


@pytest.fixture
def client():
    # Entering the client runs the lifespan, which creates and seeds the stores
    with TestClient(create_app()) as test_client:
        yield test_client


class TestApp:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_graphql_query(self, client):
        response = client.post("/graphql", json={"query": ALADDIN_QUERY})

        assert response.status_code == 200
        assert response.json() == {
            "data": {"movie": {"title": "Aladdin", "actor": [{"name": "Robin Williams"}]}}
        }
        assert response.headers["x-request-id"]

    def test_request_id_is_echoed(self, client):
        response = client.post(
            "/graphql", json={"query": ALADDIN_QUERY}, headers={"X-Request-Id": "req-42"}
        )

        assert response.headers["x-request-id"] == "req-42"

    def test_mutation_requires_identity(self, client):
        mutation = 'mutation { addMovie(movie: {id: "m", title: "Mulan"}) { id } }'

        anonymous = client.post("/graphql", json={"query": mutation})
        assert [movie["id"] for movie in anonymous.json()["data"]["addMovie"]] == [
            "naeeurehnin",
            "vnyhiorvn",
        ]

        authorized = client.post(
            "/graphql",
            json={"query": mutation},
            headers={"Authorization": "Bearer fakeUserId"},
        )
        assert [movie["id"] for movie in authorized.json()["data"]["addMovie"]] == [
            "naeeurehnin",
            "vnyhiorvn",
            "m",
        ]
