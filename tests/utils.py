def create_course(client, **overrides):
    payload = {
        "name": "Piano A1",
        "start_date": "2024-01-01",
        "fee": 1000,
        "period": "monthly",
        "schedule_days": ["Monday", "Wednesday"],
        "schedule_time": "14:00",
    }
    payload.update(overrides)
    response = client.post("/api/v1/courses", json=payload)
    assert response.status_code == 201
    return response.json()


def create_student(client, **overrides):
    payload = {"first_name": "Ali", "last_name": "Yilmaz", "phone": "5550000000"}
    payload.update(overrides)
    response = client.post("/api/v1/students", json=payload)
    assert response.status_code == 201
    return response.json()


def enroll(client, student_id, course_id, join_date="2024-01-16"):
    return client.post(
        "/api/v1/enrollments/enroll",
        json={"student_id": student_id, "course_id": course_id, "join_date": join_date},
    )
