"""API tests for /api/courses, including the deletion guard."""

from uuid import uuid4


def create_course(client, **overrides):
    payload = {"name": "CS101", "description": "Introduction to Computer Science", "duration": 12}
    payload.update(overrides)
    resp = client.post("/api/courses", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


# --- create ---

def test_create_course(client, course_payload):
    resp = client.post("/api/courses", json=course_payload)
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "CS101"
    assert body["status"] == "Active"
    assert body["duration"] == 12
    assert {"id", "createdAt", "updatedAt"} <= set(body)


def test_create_course_duplicate_name_rejected(client, course_payload):
    client.post("/api/courses", json=course_payload)
    resp = client.post("/api/courses", json=course_payload)
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]


def test_create_course_missing_field(client):
    resp = client.post("/api/courses", json={"name": "CS101", "duration": 12})
    assert resp.status_code == 400
    assert "description" in resp.json()["detail"]


def test_create_course_invalid_status(client, course_payload):
    course_payload["status"] = "Archived"
    resp = client.post("/api/courses", json=course_payload)
    assert resp.status_code == 400


# --- read ---

def test_list_courses_sorted_by_name(client):
    create_course(client, name="Physics")
    create_course(client, name="Algebra")
    resp = client.get("/api/courses")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Algebra", "Physics"]


def test_get_course(client):
    course = create_course(client)
    resp = client.get(f"/api/courses/{course['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "CS101"


def test_get_course_not_found(client):
    resp = client.get(f"/api/courses/{uuid4()}")
    assert resp.status_code == 404


def test_get_course_malformed_id(client):
    resp = client.get("/api/courses/not-a-uuid")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid course ID format"


# --- update ---

def test_update_course_overwrites_given_fields(client):
    course = create_course(client)
    resp = client.put(f"/api/courses/{course['id']}", json={"status": "Inactive"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "Inactive"
    assert body["description"] == "Introduction to Computer Science"


def test_update_course_to_existing_name_rejected(client):
    create_course(client, name="CS101")
    other = create_course(client, name="CS102")
    resp = client.put(f"/api/courses/{other['id']}", json={"name": "CS101"})
    assert resp.status_code == 400


def test_update_course_keeping_own_name(client):
    course = create_course(client)
    resp = client.put(f"/api/courses/{course['id']}", json={"name": "CS101", "duration": 14})
    assert resp.status_code == 200
    assert resp.json()["duration"] == 14


def test_update_course_not_found(client):
    resp = client.put(f"/api/courses/{uuid4()}", json={"duration": 3})
    assert resp.status_code == 404


# --- delete ---

def test_delete_referenced_course_conflicts(client, student_payload):
    course = create_course(client, name="CS101")
    student_payload["course"] = course["id"]
    assert client.post("/api/students", json=student_payload).status_code == 201

    resp = client.delete(f"/api/courses/{course['id']}")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "cannot delete: referenced by existing students"

    # The course is still there
    assert client.get(f"/api/courses/{course['id']}").status_code == 200


def test_delete_unreferenced_course(client):
    course = create_course(client, name="CS102")
    resp = client.delete(f"/api/courses/{course['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Course deleted successfully"}
    assert client.get(f"/api/courses/{course['id']}").status_code == 404


def test_delete_course_after_students_leave(client, student_payload):
    course = create_course(client)
    student_payload["course"] = course["id"]
    student = client.post("/api/students", json=student_payload).json()

    assert client.delete(f"/api/courses/{course['id']}").status_code == 409
    assert client.delete(f"/api/students/{student['id']}").status_code == 200
    assert client.delete(f"/api/courses/{course['id']}").status_code == 200


def test_delete_course_not_found(client):
    resp = client.delete(f"/api/courses/{uuid4()}")
    assert resp.status_code == 404
