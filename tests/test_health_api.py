def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "healthy"
    assert body["environment"] == "test"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_responses_carry_process_time(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "X-Process-Time" in response.headers
