HEADERS = {"X-User-Id": "user-1"}


def create_template(client, name):
    response = client.post("/task_templates/", json={"name": name}, headers=HEADERS)
    assert response.status_code == 200, response.text
    return response.json()["data"]["id"]


def test_create_and_get_template(client):
    template_id = create_template(client, "Onboarding")

    response = client.get(f"/task_templates/{template_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["data"]["name"] == "Onboarding"
    assert body["data"]["stage"] == "save"
    assert body["data"]["creator_id"] == "user-1"


def test_blank_name_returns_business_error(client):
    response = client.post("/task_templates/", json={"name": "   "}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json() == {
        "status": "error",
        "data": None,
        "message": "template name must not be empty",
    }


def test_write_requires_acting_user(client):
    response = client.post("/task_templates/", json={"name": "T"})
    assert response.status_code == 422


def test_get_missing_template_is_404(client):
    response = client.get("/task_templates/does-not-exist")
    assert response.status_code == 404


def test_rename_through_api(client):
    template_id = create_template(client, "Old")

    response = client.post("/task_templates/", json={"id": template_id, "name": "New"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == template_id
    assert client.get(f"/task_templates/{template_id}").json()["data"]["name"] == "New"


def test_replace_and_read_forms(client):
    template_id = create_template(client, "T")
    forms = [
        {"template_id": template_id, "name": "F1", "content": {"fields": ["a"]}},
        {"template_id": template_id, "name": "F2"},
    ]

    response = client.put("/task_templates/forms", json=forms, headers=HEADERS)
    assert response.status_code == 200

    data = client.get(f"/task_templates/{template_id}/forms").json()["data"]
    assert [(f["name"], f["order"]) for f in data] == [("F1", 1), ("F2", 2)]
    assert data[0]["content"] == {"fields": ["a"]}
    assert client.get(f"/task_templates/{template_id}").json()["data"]["stage"] == "design_forms"


def test_form_content_may_be_a_list(client):
    template_id = create_template(client, "T")
    forms = [{"template_id": template_id, "name": "F1", "content": [{"field": "a"}, {"field": "b"}]}]

    response = client.put("/task_templates/forms", json=forms, headers=HEADERS)
    assert response.status_code == 200, response.text

    data = client.get(f"/task_templates/{template_id}/forms").json()["data"]
    assert data[0]["content"] == [{"field": "a"}, {"field": "b"}]


def test_replace_and_read_steps(client):
    template_id = create_template(client, "T")
    steps = [{
        "id": "step-1",
        "template_id": template_id,
        "order": 0,
        "name": "Review",
        "operates": [{"name": "approve"}, {"name": ""}, {"name": "reject"}],
    }]

    response = client.put("/task_templates/steps", json=steps, headers=HEADERS)
    assert response.status_code == 200

    data = client.get(f"/task_templates/{template_id}/steps").json()["data"]
    assert len(data) == 1
    assert data[0]["order"] == 1
    assert sorted(o["name"] for o in data[0]["operates"]) == ["approve", "reject"]
    assert client.get(f"/task_templates/{template_id}").json()["data"]["stage"] == "design_steps"


def test_search_templates(client):
    for name in ("foo one", "bar", "foo two"):
        create_template(client, name)

    data = client.get("/task_templates/", params={"keywords": "foo"}).json()["data"]
    assert data["total"] == 2
    assert {t["name"] for t in data["items"]} == {"foo one", "foo two"}

    paged = client.get("/task_templates/", params={"page": 2, "rows": 2}).json()["data"]
    assert paged["total"] == 3
    assert len(paged["items"]) == 1
    assert (paged["page"], paged["rows"]) == (2, 2)


def test_search_rejects_oversized_page(client):
    response = client.get("/task_templates/", params={"rows": 100000})
    assert response.status_code == 422
