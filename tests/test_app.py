import pytest

from app import create_app
from planner import Planner

A = {"id": "A", "name": "Alpha", "sessions": [{"day": "Mon", "start": "09:00", "end": "10:00"}]}
B = {"id": "B", "name": "Beta", "faculty": "Dr. B", "sessions": [{"day": "Mon", "start": "09:30", "end": "10:30"}]}
C = {"id": "C", "name": "Gamma", "sessions": [{"day": "Tue", "start": "09:00", "end": "10:00"}]}


@pytest.fixture
def client():
    app = create_app(Planner())
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def loaded(client):
    for body in (A, B, C):
        assert client.post("/api/courses", json=body).status_code == 201
    return client


def test_add_and_list_courses(loaded):
    courses = loaded.get("/api/courses").get_json()
    assert [(c["index"], c["id"]) for c in courses] == [(0, "A"), (1, "B"), (2, "C")]
    assert courses[1]["faculty"] == "Dr. B"
    assert courses[0]["sessions"] == [{"day": "Mon", "start": "09:00", "end": "10:00"}]
    assert courses[0]["color"]["chip"] == "#6C63FF"

    assert [c["id"] for c in loaded.get("/api/courses?q=dr.").get_json()] == ["B"]


def test_add_course_from_draft(client):
    assert client.post("/api/draft/sessions", json={"day": "Fri", "start": "13:00", "end": "14:30"}).status_code == 201
    assert client.get("/api/draft").get_json() == [{"day": "Fri", "start": "13:00", "end": "14:30"}]

    rv = client.post("/api/courses", json={"id": "D", "name": "Delta"})
    assert rv.status_code == 201
    assert rv.get_json()["sessions"] == [{"day": "Fri", "start": "13:00", "end": "14:30"}]
    assert client.get("/api/draft").get_json() == []


def test_draft_session_removal(client):
    client.post("/api/draft/sessions", json={"day": "Fri", "start": "13:00", "end": "14:30"})
    client.post("/api/draft/sessions", json={"day": "Sat", "start": "13:00", "end": "14:30"})
    assert [s["day"] for s in client.delete("/api/draft/sessions/0").get_json()] == ["Sat"]
    assert client.delete("/api/draft/sessions/4").status_code == 404
    assert client.delete("/api/draft").get_json() == []


@pytest.mark.parametrize("body, status", [
    ({"day": "Mon", "start": "9am", "end": "10:00"}, 400),
    ({"day": "Mon", "start": "10:00", "end": "09:00"}, 400),
    ({"day": "Someday", "start": "09:00", "end": "10:00"}, 400),
    ({}, 400),
])
def test_bad_draft_session(client, body, status):
    rv = client.post("/api/draft/sessions", json=body)
    assert rv.status_code == status
    assert "error" in rv.get_json()


@pytest.mark.parametrize("body", [
    {"id": "A", "name": "Again", "sessions": A["sessions"]},
    {"id": "", "name": "Nameless", "sessions": A["sessions"]},
    {"id": "Z", "name": "Zed", "sessions": []},
    {"id": "Z", "name": "Zed", "sessions": "Mon 09:00"},
    {"id": "Z", "name": "Zed", "sessions": ["Mon"]},
    {"id": ["Z"], "name": "Zed", "sessions": A["sessions"]},
])
def test_rejected_courses(loaded, body):
    rv = loaded.post("/api/courses", json=body)
    assert rv.status_code == 400
    assert len(loaded.get("/api/courses").get_json()) == 3


def test_non_object_body(client):
    assert client.post("/api/courses", json=[1, 2]).status_code == 400


def test_course_limit(client):
    for i in range(10):
        body = {"id": f"C{i}", "name": "n", "sessions": [{"day": "Sun", "start": f"{i + 8}:00", "end": f"{i + 8}:30"}]}
        assert client.post("/api/courses", json=body).status_code == 201
    rv = client.post("/api/courses", json=dict(A, id="C10"))
    assert rv.status_code == 409


def test_compute_select_and_graph(loaded):
    rv = loaded.post("/api/compute")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["selectedIndex"] == 0
    assert [t["key"] for t in data["timetables"]] == ["0,2", "1,2"]
    assert data["timetables"][0]["courses"] == [
        {"index": 0, "id": "A", "name": "Alpha"},
        {"index": 2, "id": "C", "name": "Gamma"},
    ]

    assert loaded.put("/api/selection", json={"index": 1}).get_json()["selectedIndex"] == 1
    assert loaded.put("/api/selection", json={"index": 7}).status_code == 404
    assert loaded.get("/api/results").get_json()["selectedIndex"] == 1

    graph = loaded.get("/api/graph").get_json()
    assert graph["selected"] == [1, 2]
    assert graph["edges"] == [{"source": 0, "target": 1, "kind": "critical"}]


def test_compute_empty(client):
    rv = client.post("/api/compute")
    assert rv.status_code == 400
    assert client.get("/api/results").get_json() == {"selectedIndex": None, "timetables": []}


def test_remove_course_invalidates(loaded):
    loaded.post("/api/compute")
    assert loaded.delete("/api/courses/0").get_json() == {"removed": "A", "courses": 2}
    assert loaded.get("/api/results").get_json()["timetables"] == []
    assert loaded.delete("/api/courses/9").status_code == 404


def test_clear_all(loaded):
    loaded.post("/api/compute")
    assert loaded.delete("/api/courses").get_json() == {"courses": 0}
    assert loaded.get("/api/courses").get_json() == []
    assert loaded.get("/api/results").get_json()["timetables"] == []


def test_csv_download(loaded):
    loaded.post("/api/compute")
    rv = loaded.get("/api/results/1/csv")
    assert rv.status_code == 200
    assert rv.mimetype == "text/csv"
    assert "timetable_1.csv" in rv.headers["Content-Disposition"]
    assert rv.get_data(as_text=True).splitlines() == [
        "Course ID,Course Name,Faculty,Day,Start,End",
        "A,Alpha,,Mon,09:00,10:00",
        "C,Gamma,,Tue,09:00,10:00",
        "",
        "Excluded (Course ID - Course Name),Conflicts With",
        "B - Beta,A - Alpha",
    ]
    assert loaded.get("/api/results/3/csv").status_code == 404
