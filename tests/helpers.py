# tests/helpers.py
"""Request helpers shared by the API tests"""
from schooldesk.core.security import create_access_token


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


async def create_class(client, headers, name, teacher_id, **extra):
    resp = await client.post("/api/classes", json={"name": name, "teacher_id": teacher_id, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["class"]


async def create_student(client, headers, first_name, last_name=None, **extra):
    body = {"first_name": first_name, **extra}
    if last_name is not None:
        body["last_name"] = last_name
    resp = await client.post("/api/students", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["student"]


async def enroll(client, headers, class_id, student_id):
    resp = await client.post(
        "/api/class-students",
        json={"classId": class_id, "studentId": student_id},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
