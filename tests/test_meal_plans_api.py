"""Tests for the meal plan endpoints."""


def test_create_meal_plan(seeded_client, meal_plan_payload) -> None:
    response = seeded_client.post("/api/meal_plans", json=meal_plan_payload)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Meal plan created successfully"
    assert isinstance(body["meal_plan"]["id"], int)
    assert body["meal_plan"]["recipe_ids"] == "[1,2]"

    response = seeded_client.get(f"/api/meal_plans/{body['meal_plan']['id']}")
    assert response.status_code == 200
    assert response.json() == body["meal_plan"]


def test_create_accepts_recipe_id_array(seeded_client, meal_plan_payload) -> None:
    response = seeded_client.post(
        "/api/meal_plans", json={**meal_plan_payload, "recipe_ids": [3, 4]}
    )

    assert response.status_code == 201
    assert response.json()["meal_plan"]["recipe_ids"] == "[3, 4]"


def test_notes_default_to_empty(seeded_client, meal_plan_payload) -> None:
    del meal_plan_payload["notes"]

    response = seeded_client.post("/api/meal_plans", json=meal_plan_payload)

    assert response.status_code == 201
    assert response.json()["meal_plan"]["notes"] == ""


def test_create_rejects_unknown_recipes(client, meal_plan_payload) -> None:
    response = client.post("/api/meal_plans", json=meal_plan_payload)

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Meal plan references unknown recipes: 1, 2"
    assert body["details"] == [{"field": "recipe_ids", "missing": [1, 2]}]
    assert client.get("/api/meal_plans").json() == []


def test_create_rejects_malformed_recipe_ids(seeded_client, meal_plan_payload) -> None:
    for bad in ("1,2", '["a"]', "{}", "[true]"):
        response = seeded_client.post(
            "/api/meal_plans", json={**meal_plan_payload, "recipe_ids": bad}
        )
        assert response.status_code == 422, bad
        assert response.json()["details"][0]["loc"] == ["body", "recipe_ids"]


def test_list_seeded_meal_plans(seeded_client) -> None:
    response = seeded_client.get("/api/meal_plans")

    assert response.status_code == 200
    plans = response.json()
    assert [plan["name"] for plan in plans] == ["Weekly Dinner Plan", "Weekly Lunch Plan"]
    assert plans[1]["recipe_ids"] == "[3, 4]"


def test_get_missing_meal_plan(client) -> None:
    response = client.get("/api/meal_plans/12345")
    assert response.status_code == 404
    assert response.json() == {"error": "Meal plan not found"}


def test_delete_twice(seeded_client) -> None:
    response = seeded_client.delete("/api/meal_plans/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Meal plan deleted successfully"}

    response = seeded_client.delete("/api/meal_plans/1")
    assert response.status_code == 404
    assert response.json() == {"error": "Meal plan not found"}


def test_delete_malformed_id(client) -> None:
    response = client.delete("/api/meal_plans/not-an-id")
    assert response.status_code == 404


def test_list_after_creates_and_deletes(client) -> None:
    created = [
        client.post(
            "/api/meal_plans",
            json={"name": f"Plan {i}", "date": "2024-02-0{i}", "recipe_ids": "[]"},
        ).json()["meal_plan"]
        for i in range(1, 4)
    ]
    client.delete(f"/api/meal_plans/{created[0]['id']}")

    assert client.get("/api/meal_plans").json() == created[1:]


def test_out_of_range_recipe_id_is_rejected(seeded_client, meal_plan_payload) -> None:
    response = seeded_client.post(
        "/api/meal_plans", json={**meal_plan_payload, "recipe_ids": f"[{10**20}]"}
    )

    assert response.status_code == 422
    assert response.json()["details"][0]["loc"] == ["body", "recipe_ids"]


def test_out_of_range_id_is_not_found(client) -> None:
    assert client.get(f"/api/meal_plans/{10**20}").status_code == 404
    assert client.delete(f"/api/meal_plans/{10**20}").status_code == 404
