"""Message template endpoint tests."""

from fastapi.testclient import TestClient

from botdesk.core.memory import MemoryStorage
from botdesk.main import create_app


class BrokenStorage(MemoryStorage):
    async def delete_message_template(self, template_id):
        raise RuntimeError("connection reset")


def _create(client, **overrides):
    body = {
        "name": "Shipping Update",
        "content": "Hi {{customer_name}}, order {{order_id}} is {{order_status}}.",
        "keywords": ["shipping", "order"],
        **overrides,
    }
    return client.post("/api/templates", json=body)


def test_list_templates(client):
    response = client.get("/api/templates")
    assert response.status_code == 200
    names = {t["name"] for t in response.json()}
    assert names == {"Order Status", "Business Hours", "Return Policy"}


def test_create_template(client):
    response = _create(client)
    assert response.status_code == 201
    data = response.json()
    assert data["usageCount"] == 0
    assert data["isActive"] is True
    assert data["category"] == "general"
    assert client.get("/api/templates").json()[0]["id"] == data["id"]


def test_create_template_without_content_is_400(client):
    response = client.post("/api/templates", json={"name": "Empty"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


def test_get_template(client):
    created = _create(client).json()
    response = client.get(f"/api/templates/{created['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Shipping Update"


def test_get_unknown_template_is_404(client):
    response = client.get("/api/templates/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Template not found"


def test_update_template_is_partial(client):
    created = _create(client).json()

    response = client.put(
        f"/api/templates/{created['id']}", json={"isActive": False, "category": "orders"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isActive"] is False
    assert data["category"] == "orders"
    assert data["content"] == created["content"]
    assert data["keywords"] == ["shipping", "order"]


def test_update_unknown_template_is_404(client):
    response = client.put("/api/templates/missing", json={"name": "x"})
    assert response.status_code == 404


def test_delete_template(client):
    created = _create(client).json()

    response = client.delete(f"/api/templates/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get(f"/api/templates/{created['id']}").status_code == 404
    assert client.delete(f"/api/templates/{created['id']}").status_code == 404


def test_delete_failure_is_500():
    with TestClient(create_app(storage=BrokenStorage())) as client:
        response = client.delete("/api/templates/anything")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to delete template"


def test_list_variables(client):
    response = client.get("/api/templates/variables")
    assert response.status_code == 200
    variables = {v["key"]: v for v in response.json()}
    assert len(variables) == 8
    assert variables["customer_name"]["placeholder"] == "{{customer_name}}"
    assert variables["customer_name"]["sample"] == "John Smith"


def test_preview_uses_sample_values(client):
    response = client.post(
        "/api/templates/preview",
        json={"content": "Hi {{customer_name}}, your order {{ order_id }} has {{unknown_var}}."},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["preview"] == "Hi John Smith, your order #12345 has {{unknown_var}}."
    assert data["variables"] == ["customer_name", "order_id", "unknown_var"]
    assert data["unknownVariables"] == ["unknown_var"]


def test_preview_bindings_override_samples(client):
    response = client.post(
        "/api/templates/preview",
        json={"content": "Hi {{customer_name}}", "bindings": {"customer_name": "Ana"}},
    )
    assert response.json()["preview"] == "Hi Ana"
    assert response.json()["unknownVariables"] == []
