"""
API tests for the cart endpoints.

DELETE carries a JSON body, so those calls go through client.request().
"""

IDLI = {"productId": "idli_1", "name": "Idli", "qty": 1, "price": 25, "image": "Assets/Idli.jpg", "desc": "Soft and fluffy idlis"}
DOSA = {"productId": "Dosa", "name": "Dosa", "qty": 2, "price": 25}


def get_items(client):
    response = client.get("/api/cart")
    assert response.status_code == 200
    return response.json()["items"]


class TestCartAuth:

    def test_cart_requires_session(self, client):
        assert client.get("/api/cart").status_code == 401
        assert client.post("/api/cart", json=IDLI).status_code == 401
        assert client.put("/api/cart", json={"productId": "idli_1", "qty": 2}).status_code == 401
        assert client.request("DELETE", "/api/cart", json={"productId": "idli_1"}).status_code == 401


class TestAddToCart:

    def test_empty_cart(self, signed_in_client):
        assert get_items(signed_in_client) == []

    def test_adding_twice_increments_quantity(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)
        response = signed_in_client.post("/api/cart", json=IDLI)

        assert response.status_code == 200
        assert response.json()["success"] is True

        items = get_items(signed_in_client)
        assert len(items) == 1
        assert items[0]["productId"] == "idli_1"
        assert items[0]["qty"] == 2
        assert items[0]["price"] == 25

    def test_increment_by_requested_amount(self, signed_in_client):
        signed_in_client.post("/api/cart", json={**IDLI, "qty": 2})
        signed_in_client.post("/api/cart", json={**IDLI, "qty": 3})

        items = get_items(signed_in_client)
        assert [(item["productId"], item["qty"]) for item in items] == [("idli_1", 5)]

    def test_distinct_products_get_distinct_lines(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)
        response = signed_in_client.post("/api/cart", json=DOSA)

        cart = response.json()["cart"]
        assert [item["productId"] for item in cart] == ["idli_1", "Dosa"]

    def test_missing_fields_rejected(self, signed_in_client):
        for field in ("productId", "name", "qty"):
            body = {key: value for key, value in IDLI.items() if key != field}
            response = signed_in_client.post("/api/cart", json=body)
            assert response.status_code == 400, field
            assert response.json()["code"] == "INVALID_INPUT"

        assert get_items(signed_in_client) == []

    def test_non_positive_quantity_rejected(self, signed_in_client):
        assert signed_in_client.post("/api/cart", json={**IDLI, "qty": 0}).status_code == 400
        assert signed_in_client.post("/api/cart", json={**IDLI, "qty": -2}).status_code == 400
        assert get_items(signed_in_client) == []

    def test_quantity_above_line_limit_rejected(self, signed_in_client):
        for qty in (1000, 10**30):
            response = signed_in_client.post("/api/cart", json={**IDLI, "qty": qty})
            assert response.status_code == 400, qty
            assert response.json()["code"] == "INVALID_INPUT"

        assert get_items(signed_in_client) == []

    def test_increment_past_line_limit_rejected(self, signed_in_client):
        signed_in_client.post("/api/cart", json={**IDLI, "qty": 999})

        response = signed_in_client.post("/api/cart", json=IDLI)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"
        assert get_items(signed_in_client)[0]["qty"] == 999


class TestUpdateQuantity:

    def test_set_quantity_replaces(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)

        response = signed_in_client.put("/api/cart", json={"productId": "idli_1", "qty": 4})

        assert response.status_code == 200
        assert response.json()["cart"][0]["qty"] == 4

    def test_zero_quantity_removes_line(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)
        signed_in_client.post("/api/cart", json=DOSA)

        response = signed_in_client.put("/api/cart", json={"productId": "idli_1", "qty": 0})

        assert response.status_code == 200
        assert [item["productId"] for item in get_items(signed_in_client)] == ["Dosa"]

    def test_negative_quantity_removes_line(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)

        response = signed_in_client.put("/api/cart", json={"productId": "idli_1", "qty": -3})

        assert response.status_code == 200
        assert get_items(signed_in_client) == []

    def test_unknown_line_is_404(self, signed_in_client):
        response = signed_in_client.put("/api/cart", json={"productId": "vada", "qty": 2})

        assert response.status_code == 404
        assert response.json()["error"] == "Item not found in cart"

    def test_non_integer_quantity_rejected(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)

        response = signed_in_client.put("/api/cart", json={"productId": "idli_1", "qty": "lots"})

        assert response.status_code == 400

    def test_quantity_above_line_limit_rejected(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)

        response = signed_in_client.put("/api/cart", json={"productId": "idli_1", "qty": 10**30})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"
        assert get_items(signed_in_client)[0]["qty"] == 1


class TestRemoveFromCart:

    def test_remove_line(self, signed_in_client):
        signed_in_client.post("/api/cart", json=IDLI)

        response = signed_in_client.request("DELETE", "/api/cart", json={"productId": "idli_1"})

        assert response.status_code == 200
        assert response.json()["cart"] == []
        assert response.json()["message"] == "Item removed from cart"

    def test_remove_absent_line_is_noop(self, signed_in_client):
        signed_in_client.post("/api/cart", json=DOSA)

        response = signed_in_client.request("DELETE", "/api/cart", json={"productId": "idli_1"})

        assert response.status_code == 200
        assert [item["productId"] for item in response.json()["cart"]] == ["Dosa"]

    def test_remove_requires_product_id(self, signed_in_client):
        response = signed_in_client.request("DELETE", "/api/cart", json={})

        assert response.status_code == 400
