"""
Tests for the service health and root endpoints.
"""


def test_healthz(test_client):
    """Test health check endpoint."""
    response = test_client.get("/healthz")
    assert response.status_code == 200

    data = response.json()
    assert data["ok"] is True
    assert data["service"] == "colorcraft-palettes"
    assert data["version"] == "1.0.0"


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"
