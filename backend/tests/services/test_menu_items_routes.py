"""Menu Items Routes - end-to-end HTTP tests against SQLite storage.

Invariants:
    - POST creates (201 + Location), GET reads, POST/PUT/PATCH on an id update
    - Custom links never keep object / object_id
    - Errors use the REST error envelope with the right status
    - Listing exposes X-WP-Total / X-WP-TotalPages and followable prev/next links
    - An edit-context response sent back as an update changes nothing
"""

BASE = "/api/v1/menu-items"


async def _create(client, **body):
    res = await client.post(BASE, json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_custom_link_clears_object(client, seed_menu):
    res = await client.post(BASE, json={
        "title": "Home", "type": "custom", "url": "https://example.com",
        "menu_id": seed_menu.id, "object": "page", "object_id": 12,
    })
    assert res.status_code == 201
    body = res.json()
    assert res.headers["location"] == f"http://localhost:8000{BASE}/{body['id']}"
    assert body["type"] == "custom"
    assert body["object"] == ""
    assert body["object_id"] == 0
    assert body["url"] == "https://example.com"
    assert body["title"] == {"raw": "Home", "rendered": "Home"}
    assert body["type_label"] == "Custom Link"
    assert body["menu_order"] == 0
    assert body["_invalid"] is False
    assert body["_links"]["self"][0]["href"].endswith(f"{BASE}/{body['id']}")


async def test_create_with_id_is_400(client):
    res = await client.post(BASE, json={"id": 3, "title": "x"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "rest_post_exists"


async def test_create_under_unknown_menu_is_400(client):
    res = await client.post(BASE, json={"title": "x", "menu_id": 999})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "invalid_menu_id"


async def test_create_with_invalid_field_is_400(client):
    res = await client.post(BASE, json={"title": "x", "type": "widget"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "rest_invalid_param"
    assert error["context"]["field"] == "type"


async def test_create_with_non_object_body_is_400(client):
    res = await client.post(BASE, json=["not", "an", "object"])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "rest_invalid_param"


async def test_create_post_type_item_resolves_target(client, seed_menu, seed_page):
    body = await _create(
        client, type="post_type", object="page", object_id=seed_page.id,
        menu_id=seed_menu.id,
    )
    assert body["object_id"] == seed_page.id
    assert body["url"] == f"http://localhost:8000/?page_id={seed_page.id}"
    assert body["type_label"] == "Page"

    res = await client.get(f"{BASE}/{body['id']}")
    assert res.json()["original_title"] == "About & Contact"


async def test_get_item_view_context(client):
    created = await _create(client, title="Home", url="https://example.com")
    res = await client.get(f"{BASE}/{created['id']}")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == {"rendered": "Home"}
    assert "menu_id" not in body


async def test_get_item_fields_selection(client):
    created = await _create(client, title="Home")
    res = await client.get(f"{BASE}/{created['id']}", params={"_fields": "id,type"})
    body = res.json()
    assert set(body) == {"id", "type", "_links"}
    assert body["type"] == "custom"


async def test_get_missing_item_is_404(client):
    res = await client.get(f"{BASE}/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "rest_post_invalid_id"


async def test_update_with_each_method(client):
    created = await _create(client, title="Home", url="https://example.com")
    for method, title in (("POST", "A"), ("PUT", "B"), ("PATCH", "C")):
        res = await client.request(
            method, f"{BASE}/{created['id']}",
            json={"title": title, "url": "https://example.com"},
        )
        assert res.status_code == 200
        assert res.json()["title"]["raw"] == title


async def test_update_resets_absent_fields(client):
    created = await _create(
        client, title="Home", url="https://example.com", target="_blank",
    )
    res = await client.put(f"{BASE}/{created['id']}", json={"title": "Home"})
    body = res.json()
    assert body["target"] == ""
    assert body["url"] == ""


async def test_update_missing_item_is_404(client):
    res = await client.put(f"{BASE}/999", json={"title": "x"})
    assert res.status_code == 404


async def test_meta_round_trip(client):
    created = await _create(client, title="Home", meta={"_highlight": "yes"})
    assert created["meta"] == {"_highlight": "yes"}


async def test_invalid_meta_is_400(client):
    res = await client.post(BASE, json={"title": "x", "meta": {"_highlight": ["a"]}})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "rest_invalid_meta"


async def test_list_headers_and_order(client, seed_menu):
    await _create(client, title="A", menu_id=seed_menu.id)
    await _create(client, title="B", menu_id=seed_menu.id)
    await _create(client, title="C", menu_id=seed_menu.id, status="draft")

    res = await client.get(BASE, params={"per_page": 1})
    assert res.status_code == 200
    assert res.headers["x-wp-total"] == "2"
    assert res.headers["x-wp-totalpages"] == "2"
    assert [item["title"]["rendered"] for item in res.json()] == ["A"]

    res = await client.get(BASE, params={"status": "any", "order": "desc"})
    assert [item["title"]["rendered"] for item in res.json()] == ["C", "B", "A"]


async def test_list_invalid_orderby_is_400(client):
    res = await client.get(BASE, params={"orderby": "price"})
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "orderby"


async def test_list_non_integer_page_is_400(client):
    res = await client.get(BASE, params={"page": "two"})
    assert res.status_code == 400


async def test_schema_endpoint(client):
    res = await client.get(f"{BASE}/schema")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "nav_menu_item"
    assert "meta" in body["properties"]
    assert body["collection_params"]["orderby"]["default"] == "menu_order"


async def test_options_on_collection_serves_schema(client):
    res = await client.options(BASE)
    assert res.status_code == 200
    assert res.json()["$schema"] == "http://json-schema.org/draft-04/schema#"


async def test_create_with_non_integer_body_field_names_it(client):
    res = await client.post(BASE, json={"title": "x", "menu_order": "three"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "rest_invalid_param"
    assert error["context"]["field"] == "menu_order"


async def test_create_accepts_numeric_strings_and_delimited_classes(client):
    body = await _create(client, title="Home", menu_order="4", classes="nav primary")
    assert body["menu_order"] == 4
    assert body["classes"] == ["nav", "primary"]


async def test_create_with_zero_id_creates(client):
    body = await _create(client, id="0", title="Home")
    assert body["id"] > 0


async def test_pagination_link_is_followable(client, seed_menu):
    for title in ("A", "B", "C"):
        await _create(client, title=title, menu_id=seed_menu.id)

    res = await client.get(BASE, params={"per_page": 1, "page": 1, "order": "desc"})
    link = res.headers["link"]
    assert 'rel="next"' in link
    next_url = link[link.index("<") + 1:link.index(">")]
    assert "per_page=1" in next_url
    assert "order=desc" in next_url

    res = await client.get(next_url)
    assert res.status_code == 200
    assert [item["title"]["rendered"] for item in res.json()] == ["B"]


ROUND_TRIP_FIELDS = (
    "url", "target", "classes", "xfn", "description", "attr_title", "type",
    "object", "object_id", "menu_order", "parent", "menu_item_parent",
)


async def test_edit_response_round_trips_through_update(client, seed_menu, seed_page):
    parent = await _create(client, title="Top", menu_id=seed_menu.id)
    created = await _create(
        client, title="About", type="post_type", object="page",
        object_id=seed_page.id, menu_id=seed_menu.id, target="_blank",
        classes=["nav", "primary"], xfn=["friend"], description="Who we are",
        attr_title="About us", menu_order=3, menu_item_parent=parent["id"],
    )
    url = f"{BASE}/{created['id']}"

    before = (await client.get(url, params={"context": "edit"})).json()
    res = await client.put(url, json={**before, "menu_id": seed_menu.id})
    assert res.status_code == 200
    after = (await client.get(url, params={"context": "edit"})).json()

    assert after["title"]["raw"] == before["title"]["raw"] == "About"
    for name in ROUND_TRIP_FIELDS:
        assert after[name] == before[name], name
    assert before["menu_item_parent"] == parent["id"]
    assert before["classes"] == ["nav", "primary"]
