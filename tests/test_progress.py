def test_progress_upserts_by_course(client, student_headers):
    client.post("/api/course-progress", json={"courseId": "m1", "progress": 25}, headers=student_headers)
    client.post("/api/course-progress", json={"courseId": "m2", "progress": 50}, headers=student_headers)
    response = client.post(
        "/api/course-progress",
        json={"courseId": "m1", "progress": 100, "completed": True},
        headers=student_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["progress"]["completed"] is True

    progress = client.get("/api/course-progress/alice").get_json()["progress"]
    assert [(p["courseId"], p["progress"], p["completed"]) for p in progress] == [
        ("m1", 100, True),
        ("m2", 50, False),
    ]
    assert all(p["lastAccessed"] for p in progress)


def test_unknown_user_has_empty_progress(client):
    assert client.get("/api/course-progress/nobody").get_json()["progress"] == []


def test_progress_is_recorded_for_token_owner(client, student_headers):
    client.post(
        "/api/course-progress",
        json={"username": "someone-else", "courseId": "m1", "progress": 10},
        headers=student_headers,
    )

    assert client.get("/api/course-progress/someone-else").get_json()["progress"] == []
    assert len(client.get("/api/course-progress/alice").get_json()["progress"]) == 1


def test_progress_out_of_range_is_rejected(client, student_headers):
    for bad in (-1, 101, "lots"):
        response = client.post(
            "/api/course-progress",
            json={"courseId": "m1", "progress": bad},
            headers=student_headers,
        )
        assert response.status_code == 400


def test_progress_requires_course_id(client, student_headers):
    response = client.post("/api/course-progress", json={"progress": 10}, headers=student_headers)
    assert response.status_code == 400


def test_completed_must_be_boolean(client, student_headers):
    for bad in ("false", 1, None):
        response = client.post(
            "/api/course-progress",
            json={"courseId": "m1", "progress": 10, "completed": bad},
            headers=student_headers,
        )
        assert response.status_code == 400

    assert client.get("/api/course-progress/alice").get_json()["progress"] == []
