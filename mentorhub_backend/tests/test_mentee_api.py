import csv
from io import StringIO

from conftest import make_academic_form, make_attendance_form, make_interaction_form


def test_submit_each_form(client):
    cases = [
        ("/mentee/interaction", make_interaction_form(), "Interaction form submitted successfully"),
        ("/mentee/attendance", make_attendance_form(), "Attendance submitted successfully"),
        ("/mentee/academic", make_academic_form(), "Academic details submitted successfully"),
    ]
    for path, form, message in cases:
        response = client.post(path, json=form)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == message
        assert data["id"].startswith(f"{path.rsplit('/', 1)[1]}:AB12345678:")


def test_submit_requires_prn_and_name(client):
    form = make_academic_form()
    del form["prn"]
    response = client.post("/mentee/academic", json=form)
    assert response.status_code == 400
    assert response.json() == {"error": "PRN and name are required"}


def test_submit_rejects_non_object_body(client):
    response = client.post("/mentee/attendance", json=["not", "an", "object"])
    assert response.status_code == 400
    assert "error" in response.json()


def test_submit_rejects_malformed_json(client):
    response = client.post(
        "/mentee/attendance",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_academic_submission_visible_in_detail(client, auth_headers):
    form = make_academic_form(prn="AB12345678", name="J Doe")
    assert client.post("/mentee/academic", json=form).status_code == 200

    response = client.get("/mentor/mentee/AB12345678", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["prn"] == "AB12345678"
    assert data["interactions"] == []
    assert data["attendance"] == []
    academic = data["academic"]
    assert academic["kind"] == "academic"
    assert academic["submittedAt"]
    assert {k: academic[k] for k in form} == form


def test_detail_lists_full_history(client, auth_headers):
    client.post("/mentee/interaction", json=make_interaction_form(suggestions="first"))
    client.post("/mentee/interaction", json=make_interaction_form(suggestions="second"))
    client.post("/mentee/attendance", json=make_attendance_form())

    data = client.get("/mentor/mentee/AB12345678", headers=auth_headers).json()

    assert sorted(r["suggestions"] for r in data["interactions"]) == ["first", "second"]
    assert len(data["attendance"]) == 1
    assert data["academic"] is None


def test_mentee_list_merges_latest_records(client, auth_headers):
    client.post("/mentee/interaction", json=make_interaction_form(prn="AB12345678", name="From Interaction"))
    client.post("/mentee/academic", json=make_academic_form(prn="AB12345678", name="From Academic"))
    client.post("/mentee/interaction", json=make_interaction_form(prn="CD12345678", name="Only Interaction"))

    response = client.get("/mentor/mentees", headers=auth_headers)

    assert response.status_code == 200
    rows = {row["prn"]: row for row in response.json()["mentees"]}
    both, only = rows["AB12345678"], rows["CD12345678"]
    assert both["hasInteraction"] is True and both["hasAcademic"] is True
    assert both["name"] == "From Academic"
    assert both["department"] == "computer"
    assert both["careerGoals"] == "Backend engineering"
    assert only["hasInteraction"] is True and only["hasAcademic"] is False
    assert "department" not in only
    assert "personalEmail" not in only


def test_mentee_list_search(client, auth_headers):
    client.post("/mentee/academic", json=make_academic_form(prn="AB12345678", name="Asha Patil"))
    client.post("/mentee/academic", json=make_academic_form(prn="CD12345678", name="Rohan Das"))

    response = client.get("/mentor/mentees", params={"search": "rohan"}, headers=auth_headers)

    assert [row["prn"] for row in response.json()["mentees"]] == ["CD12345678"]


def test_stats_and_export(client, auth_headers):
    client.post("/mentee/interaction", json=make_interaction_form(prn="AB12345678"))
    client.post("/mentee/academic", json=make_academic_form(prn="AB12345678"))
    client.post("/mentee/academic", json=make_academic_form(prn="CD12345678", name="K Roe"))

    stats = client.get("/mentor/stats", headers=auth_headers).json()
    assert stats == {"totalMentees": 2, "withInteractions": 1, "withAcademic": 2, "pendingSubmissions": 1}

    response = client.get("/mentor/mentees/export", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(StringIO(response.text)))
    assert [r["prn"] for r in rows] == ["AB12345678", "CD12345678"]
    assert rows[0]["hasInteraction"] == "True"


def test_dashboard_returns_raw_collections(client, auth_headers, registered_mentor):
    client.post("/mentee/interaction", json=make_interaction_form())
    client.post("/mentee/academic", json=make_academic_form())
    client.post("/mentee/attendance", json=make_attendance_form())
    client.post("/mentee/attendance", json=make_attendance_form(sessionDuration="60"))

    response = client.get("/mentor/dashboard", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["mentor"]["id"] == registered_mentor["id"]
    assert len(data["mentees"]["interactions"]) == 1
    assert len(data["mentees"]["academic"]) == 1
    assert len(data["mentees"]["attendance"]) == 2
    assert "hasInteraction" not in data["mentees"]["interactions"][0]


def test_error_responses_carry_request_id(client):
    response = client.get("/mentor/dashboard")
    assert response.status_code == 401
    assert response.headers.get("x-request-id")


def test_non_string_prn_rejected_and_dashboard_keeps_working(client, auth_headers):
    assert client.post("/mentee/interaction", json=make_interaction_form()).status_code == 200

    for bad in (["AB12345678"], {"x": 1}, 12.5):
        response = client.post("/mentee/interaction", json={"prn": bad, "name": "X"})
        assert response.status_code == 400
        assert response.json() == {"error": "PRN must be a string"}

    for path in ("/mentor/mentees", "/mentor/stats", "/mentor/mentees/export"):
        assert client.get(path, headers=auth_headers).status_code == 200
    assert [row["prn"] for row in client.get("/mentor/mentees", headers=auth_headers).json()["mentees"]] == ["AB12345678"]
