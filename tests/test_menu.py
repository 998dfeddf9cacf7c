from storefront.services import menu_service


def test_menu_lists_catalogue_in_order(client):
    response = client.get("/api/menu")

    assert response.status_code == 200
    names = [item["name"] for item in response.json()["items"]]
    assert names == ["Punugulu", "Bajji", "Vada", "Idli", "Dosa", "Upma", "Pesarattu", "Bites"]


def test_menu_is_public(client):
    assert client.get("/api/menu").status_code == 200
    assert client.get("/api/menu/Idli").status_code == 200


def test_search_is_case_insensitive_substring(client):
    response = client.get("/api/menu", params={"q": "  A "})

    names = [item["name"] for item in response.json()["items"]]
    assert names == ["Bajji", "Vada", "Dosa", "Upma", "Pesarattu"]


def test_search_without_match(client):
    assert client.get("/api/menu", params={"q": "pizza"}).json() == {"items": []}


def test_item_detail(client):
    response = client.get("/api/menu/Pesarattu")

    assert response.status_code == 200
    assert response.json()["item"] == {
        "productId": "Pesarattu",
        "name": "Pesarattu",
        "price": 30,
        "desc": "Green gram crepe from Andhra",
        "image": "Assets/Pesarattu.jpg",
    }


def test_unknown_item_is_404(client):
    response = client.get("/api/menu/Pizza")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_product_id_from_name():
    assert menu_service.make_product_id("Masala  Dosa ") == "Masala_Dosa"
    assert menu_service.make_product_id("Idli") == "Idli"
