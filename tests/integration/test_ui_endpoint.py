from fastapi import status


def test_root_serves_web_app(client):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/html")
    assert "<title>FridgeRaider</title>" in response.text
    assert "const PLAN_DAY_CHOICES = [1, 3, 5, 7];" in response.text
