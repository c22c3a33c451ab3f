import time
from typing import Any, Dict, Optional

import pytest

from product_service.app.core.event_management import (
    product_created_sink,
    product_updated_sink,
)

GRAPHQL = "/graphql"


def execute(client, query: str, variables: Optional[Dict[str, Any]] = None, headers=None):
    response = client.post(
        GRAPHQL, json={"query": query, "variables": variables or {}}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


def classification(body: Dict[str, Any]) -> str:
    return body["errors"][0]["extensions"]["classification"]


CREATE_PRODUCT = """
mutation Create($input: ProductInput!) {
  createProduct(input: $input) { id name price stockQuantity category { id name } }
}
"""


class TestCatalogQueries:
    def test_products_lists_seeded_catalog(self, client):
        body = execute(
            client, "{ products { id name price stockQuantity category { name } } }"
        )

        products = body["data"]["products"]
        assert len(products) == 8
        names = {p["name"]: p for p in products}
        assert names["Spring Boot in Action"]["category"]["name"] == "Books"
        assert names["Effective Java"]["price"] == pytest.approx(44.99)

    def test_product_by_id(self, client):
        body = execute(client, '{ product(id: "1") { id name category { name } } }')

        assert body["data"]["product"]["id"] == "1"
        assert body["data"]["product"]["category"]["name"] == "Electronics"

    def test_missing_product_is_not_found(self, client):
        body = execute(client, '{ product(id: "999") { id } }')

        assert body["data"] is None
        assert classification(body) == "NOT_FOUND"
        assert body["errors"][0]["message"] == "Product not found with id: 999"

    def test_categories_with_products(self, client):
        body = execute(client, "{ categories { name products { name } } }")

        categories = {c["name"]: c for c in body["data"]["categories"]}
        assert set(categories) == {"Electronics", "Clothing", "Books"}
        assert {p["name"] for p in categories["Books"]["products"]} == {
            "Spring Boot in Action",
            "Effective Java",
        }

    def test_products_by_missing_category(self, client):
        body = execute(client, '{ productsByCategory(categoryId: "77") { id } }')

        assert classification(body) == "NOT_FOUND"
        assert body["errors"][0]["message"] == "Category not found with id: 77"

    def test_non_numeric_id_is_bad_request(self, client):
        body = execute(client, '{ category(id: "abc") { id } }')

        assert classification(body) == "BAD_REQUEST"


class TestCatalogMutations:
    product_input = {
        "name": "Mechanical Keyboard",
        "description": "Hot-swappable switches",
        "price": 129.5,
        "stockQuantity": 30,
        "categoryId": "1",
    }

    def test_anonymous_mutation_is_forbidden(self, client):
        body = execute(client, CREATE_PRODUCT, {"input": self.product_input})

        assert classification(body) == "FORBIDDEN"
        assert body["errors"][0]["message"] == "Access denied: ADMIN role required"

    def test_non_admin_mutation_is_forbidden(self, client, user_headers):
        body = execute(
            client, CREATE_PRODUCT, {"input": self.product_input}, headers=user_headers
        )

        assert classification(body) == "FORBIDDEN"

    def test_admin_creates_product(self, client, admin_headers):
        body = execute(
            client, CREATE_PRODUCT, {"input": self.product_input}, headers=admin_headers
        )

        created = body["data"]["createProduct"]
        assert created["name"] == "Mechanical Keyboard"
        assert created["price"] == pytest.approx(129.5)
        assert created["category"]["name"] == "Electronics"

        listed = execute(client, "{ products { name } }")["data"]["products"]
        assert "Mechanical Keyboard" in {p["name"] for p in listed}

    def test_admin_token_from_cookie(self, client, admin_headers):
        token = admin_headers["Authorization"].split(" ", 1)[1]
        client.cookies.set("access_token", token)

        body = execute(client, CREATE_PRODUCT, {"input": self.product_input})

        assert body["data"]["createProduct"]["name"] == "Mechanical Keyboard"

    def test_create_product_in_missing_category(self, client, admin_headers):
        body = execute(
            client,
            CREATE_PRODUCT,
            {"input": {**self.product_input, "categoryId": "50"}},
            headers=admin_headers,
        )

        assert classification(body) == "NOT_FOUND"

    def test_negative_price_is_bad_request(self, client, admin_headers):
        body = execute(
            client,
            CREATE_PRODUCT,
            {"input": {**self.product_input, "price": -1.0}},
            headers=admin_headers,
        )

        assert classification(body) == "BAD_REQUEST"

    def test_update_product_changes_given_fields(self, client, admin_headers):
        body = execute(
            client,
            """
            mutation {
              updateProduct(id: "1", input: {stockQuantity: 5, categoryId: "3"}) {
                name stockQuantity category { name }
              }
            }
            """,
            headers=admin_headers,
        )

        updated = body["data"]["updateProduct"]
        assert updated["name"] == "Smartphone X"
        assert updated["stockQuantity"] == 5
        assert updated["category"]["name"] == "Books"

    def test_delete_product(self, client, admin_headers):
        body = execute(
            client, 'mutation { deleteProduct(id: "2") }', headers=admin_headers
        )
        assert body["data"]["deleteProduct"] is True

        missing = execute(client, '{ product(id: "2") { id } }')
        assert classification(missing) == "NOT_FOUND"

    def test_delete_missing_product(self, client, admin_headers):
        body = execute(
            client, 'mutation { deleteProduct(id: "999") }', headers=admin_headers
        )

        assert classification(body) == "NOT_FOUND"

    def test_delete_category_with_products_returns_false(self, client, admin_headers):
        body = execute(
            client, 'mutation { deleteCategory(id: "1") }', headers=admin_headers
        )

        assert body["data"]["deleteCategory"] is False

    def test_category_lifecycle(self, client, admin_headers):
        created = execute(
            client,
            'mutation { createCategory(input: {name: "Garden"}) { id name } }',
            headers=admin_headers,
        )["data"]["createCategory"]

        updated = execute(
            client,
            'mutation { updateCategory(id: "%s", input: {description: "Outdoor"}) '
            "{ name description } }" % created["id"],
            headers=admin_headers,
        )["data"]["updateCategory"]
        assert updated == {"name": "Garden", "description": "Outdoor"}

        deleted = execute(
            client,
            'mutation { deleteCategory(id: "%s") }' % created["id"],
            headers=admin_headers,
        )
        assert deleted["data"]["deleteCategory"] is True

    def test_blank_category_rename_is_bad_request(self, client, admin_headers):
        body = execute(
            client,
            'mutation { updateCategory(id: "1", input: {name: "   "}) { name } }',
            headers=admin_headers,
        )

        assert classification(body) == "BAD_REQUEST"
        category = execute(client, '{ category(id: "1") { name } }')
        assert category["data"]["category"]["name"] == "Electronics"


def wait_for_subscribers(sink, expected: int) -> None:
    for _ in range(200):
        if sink.subscriber_count == expected:
            break
        time.sleep(0.01)
    assert sink.subscriber_count == expected


class TestCatalogSubscriptions:
    def _subscribe(self, websocket, query: str) -> None:
        websocket.send_json({"type": "connection_init"})
        assert websocket.receive_json()["type"] == "connection_ack"
        websocket.send_json({"id": "1", "type": "subscribe", "payload": {"query": query}})

    def test_product_created_is_pushed(self, client, admin_headers):
        with client.websocket_connect(
            GRAPHQL, subprotocols=["graphql-transport-ws"]
        ) as websocket:
            self._subscribe(
                websocket, "subscription { productCreated { id name category { name } } }"
            )
            wait_for_subscribers(product_created_sink, 1)

            created = execute(
                client,
                CREATE_PRODUCT,
                {
                    "input": {
                        "name": "USB Hub",
                        "price": 19.99,
                        "stockQuantity": 40,
                        "categoryId": "1",
                    }
                },
                headers=admin_headers,
            )["data"]["createProduct"]

            message = websocket.receive_json()
            assert message["type"] == "next"
            assert message["id"] == "1"
            assert message["payload"]["data"]["productCreated"] == {
                "id": created["id"],
                "name": "USB Hub",
                "category": {"name": "Electronics"},
            }

            websocket.send_json({"id": "1", "type": "complete"})
            wait_for_subscribers(product_created_sink, 0)

    def test_product_updated_is_pushed(self, client, admin_headers):
        with client.websocket_connect(
            GRAPHQL, subprotocols=["graphql-transport-ws"]
        ) as websocket:
            self._subscribe(
                websocket, "subscription { productUpdated { id stockQuantity } }"
            )
            wait_for_subscribers(product_updated_sink, 1)

            execute(
                client,
                'mutation { updateProduct(id: "4", input: {stockQuantity: 12}) { id } }',
                headers=admin_headers,
            )

            message = websocket.receive_json()
            assert message["type"] == "next"
            assert message["payload"]["data"]["productUpdated"] == {
                "id": "4",
                "stockQuantity": 12,
            }

            websocket.send_json({"id": "1", "type": "complete"})
            wait_for_subscribers(product_updated_sink, 0)
