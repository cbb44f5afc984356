import pytest
from fastapi.testclient import TestClient

from grade_api.services.validation import INPUT_TYPES

GRADE_INPUT = {
    "subject_grade_id": 1,
    "input_type": "quiz",
    "input_name": "Quiz 1",
    "score": 95,
    "term": "midterms",
    "created_by": 3,
}


def _create(client, **overrides) -> dict:
    res = client.post("/api/grade_inputs", json={**GRADE_INPUT, **overrides})
    assert res.status_code == 201
    return res.json()["data"]


def test_create_grade_input(client):
    res = client.post("/api/grade_inputs", json=GRADE_INPUT)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Grade input created successfully"

    data = body["data"]
    for field, value in GRADE_INPUT.items():
        assert data[field] == value
    assert data["grade_input_id"] > 0
    assert data["created_at"] == data["updated_at"]


@pytest.mark.parametrize("input_type", INPUT_TYPES)
def test_every_input_type_can_be_created(client, input_type):
    assert _create(client, input_type=input_type)["input_type"] == input_type


def test_zero_score_is_accepted(client):
    assert _create(client, score=0)["score"] == 0


def test_create_with_invalid_input_type(client):
    res = client.post("/api/grade_inputs", json={**GRADE_INPUT, "input_type": "essay"})
    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "Invalid input_type. Must be one of: "
        "quiz, exam, assignment, project, recitation, attendance",
    }


def test_create_with_invalid_term(client):
    res = client.post("/api/grade_inputs", json={**GRADE_INPUT, "term": "prelims"})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid term. Must be one of: midterms, finals"


def test_create_with_missing_fields(client):
    res = client.post("/api/grade_inputs", json={"subject_grade_id": 1, "input_type": "quiz"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required fields: input_name, score, term"


def test_null_score_passes_validation_and_reaches_store(client):
    res = client.post("/api/grade_inputs", json={**GRADE_INPUT, "score": None})
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Error creating grade input"
    assert "error" in body


def test_store_failure_detail_can_be_hidden(app_factory):
    with TestClient(app_factory(EXPOSE_ERROR_DETAILS=False)) as client:
        res = client.post("/api/grade_inputs", json={**GRADE_INPUT, "score": None})

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Error creating grade input"}


def test_update_keeps_omitted_fields(client):
    created = _create(client)

    res = client.put(
        f"/api/grade_inputs/{created['grade_input_id']}",
        json={"input_name": "Quiz 1 (retake)"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Grade input updated successfully"
    data = body["data"]
    assert data["input_name"] == "Quiz 1 (retake)"
    for field in ("subject_grade_id", "input_type", "score", "term", "created_by", "created_at"):
        assert data[field] == created[field]
    assert data["updated_at"] != created["updated_at"]


def test_update_validates_supplied_enums(client):
    created = _create(client)
    grade_input_id = created["grade_input_id"]

    res = client.put(f"/api/grade_inputs/{grade_input_id}", json={"term": "summer"})
    assert res.status_code == 400

    res = client.put(f"/api/grade_inputs/{grade_input_id}", json={"input_type": ""})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Invalid input_type")

    res = client.put(f"/api/grade_inputs/{grade_input_id}", json={"term": "finals"})
    assert res.status_code == 200
    assert res.json()["data"]["term"] == "finals"


def test_update_missing_grade_input(client):
    res = client.put("/api/grade_inputs/404", json={"score": 10})
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Grade input not found"}


def test_list_filters_are_conjunctive(client):
    match = _create(client, subject_grade_id=4, term="finals", input_type="exam")
    _create(client, subject_grade_id=4, term="finals", input_type="quiz")
    _create(client, subject_grade_id=4, term="midterms", input_type="exam")
    _create(client, subject_grade_id=5, term="finals", input_type="exam")

    res = client.get(
        "/api/grade_inputs",
        params={"subject_grade_id": 4, "term": "finals", "input_type": "exam"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 1
    assert body["data"][0]["grade_input_id"] == match["grade_input_id"]

    res = client.get("/api/grade_inputs", params={"subject_grade_id": 4})
    assert res.json()["count"] == 3

    res = client.get("/api/grade_inputs")
    ids = [row["grade_input_id"] for row in res.json()["data"]]
    assert ids == sorted(ids, reverse=True)


def test_empty_filters_are_ignored(client):
    ids = [_create(client, subject_grade_id=n)["grade_input_id"] for n in range(1, 4)]

    res = client.get(
        "/api/grade_inputs",
        params={"subject_grade_id": "", "term": "", "input_type": ""},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 3
    assert [row["grade_input_id"] for row in body["data"]] == list(reversed(ids))


def test_get_and_delete_grade_input(client):
    created = _create(client)
    grade_input_id = created["grade_input_id"]

    res = client.get(f"/api/grade_inputs/{grade_input_id}")
    assert res.status_code == 200
    assert res.json()["data"] == created

    res = client.delete(f"/api/grade_inputs/{grade_input_id}")
    assert res.status_code == 200
    assert res.json()["deleted_id"] == grade_input_id

    assert client.delete(f"/api/grade_inputs/{grade_input_id}").status_code == 404
    assert client.get(f"/api/grade_inputs/{grade_input_id}").status_code == 404


def test_subject_summary_groups_by_term(client):
    _create(client, subject_grade_id=9, term="midterms", score=80)
    _create(client, subject_grade_id=9, term="midterms", score=91)
    _create(client, subject_grade_id=9, term="finals", score=88.5)
    _create(client, subject_grade_id=10, term="finals", score=10)

    res = client.get("/api/grade_inputs/summary/9")
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "count": 2,
        "data": [
            {
                "term": "finals",
                "input_count": 1,
                "average_score": 88.5,
                "highest_score": 88.5,
                "lowest_score": 88.5,
            },
            {
                "term": "midterms",
                "input_count": 2,
                "average_score": 85.5,
                "highest_score": 91.0,
                "lowest_score": 80.0,
            },
        ],
    }


def test_subject_summary_without_inputs(client):
    res = client.get("/api/grade_inputs/summary/12345")
    assert res.status_code == 200
    assert res.json() == {"success": True, "count": 0, "data": []}
