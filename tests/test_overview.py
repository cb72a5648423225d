# tests/test_overview.py
from datetime import date, timedelta

import pytest

from tests.helpers import create_class, create_student, enroll

pytestmark = pytest.mark.anyio


async def put_attendance(client, headers, class_id, on, statuses):
    resp = await client.put(
        "/api/attendance",
        json={
            "classId": class_id,
            "date": on.isoformat(),
            "records": [{"studentId": sid, "status": status} for sid, status in statuses],
        },
        headers=headers,
    )
    assert resp.status_code == 200, resp.text


async def put_grades(client, headers, class_id, name, scores):
    resp = await client.post(f"/api/classes/{class_id}/grade-items", json={"name": name}, headers=headers)
    assert resp.status_code == 201, resp.text
    item_id = resp.json()["gradeItem"]["id"]
    resp = await client.put(
        f"/api/grade-items/{item_id}/grades",
        json={"grades": [{"studentId": sid, "score": score} for sid, score in scores]},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text


@pytest.fixture
async def school_day(client, seed, as_admin):
    """
    Math (teacher_a) has Amy and Bo, Art (teacher_a2) has Cat; Dan is not
    enrolled anywhere. Today Bo is absent from Math.
    """
    math = await create_class(client, as_admin, "Math", seed.teacher_a.id)
    art = await create_class(client, as_admin, "Art", seed.teacher_a2.id)
    amy = await create_student(client, as_admin, "Amy", "Ash")
    bo = await create_student(client, as_admin, "Bo", "Birch")
    cat = await create_student(client, as_admin, "Cat", "Cedar")
    await create_student(client, as_admin, "Dan", "Dogwood")
    for class_, student in ((math, amy), (math, bo), (art, cat)):
        await enroll(client, as_admin, class_["id"], student["id"])

    today = date.today()
    await put_attendance(client, as_admin, math["id"], today, [(amy["id"], "present"), (bo["id"], "absent")])
    await put_attendance(client, as_admin, art["id"], today, [(cat["id"], "present")])
    # Outside the rolling window
    await put_attendance(client, as_admin, art["id"], today - timedelta(days=45), [(cat["id"], "absent")])

    await put_grades(client, as_admin, math["id"], "Quiz", [(amy["id"], 80), (bo["id"], 90)])
    await put_grades(client, as_admin, art["id"], "Sketch", [(cat["id"], 70)])
    return math, art, amy, bo, cat


async def test_school_admin_overview(client, school_day, as_admin):
    resp = await client.get("/api/overview", headers=as_admin)

    assert resp.status_code == 200, resp.text
    overview = resp.json()["overview"]
    assert overview["totalStudents"] == 4
    assert overview["totalTeachers"] == 2
    assert overview["totalClasses"] == 2
    assert overview["averageAttendance"] == 67
    assert overview["classPerformance"] == [
        {"name": "Art", "average": 70.0},
        {"name": "Math", "average": 85.0},
    ]
    assert overview["averageGrade"] == 78


async def test_today_absences(client, school_day, as_admin):
    _, _, _, bo, _ = school_day

    overview = (await client.get("/api/overview", headers=as_admin)).json()["overview"]

    assert overview["todayAbsences"] == [
        {"studentId": bo["id"], "firstName": "Bo", "lastName": "Birch", "className": "Math", "status": "absent"}
    ]


async def test_teacher_overview_covers_own_classes(client, school_day, as_teacher):
    resp = await client.get("/api/overview", headers=as_teacher)

    overview = resp.json()["overview"]
    assert overview["totalStudents"] == 2
    assert overview["totalClasses"] == 1
    assert overview["averageAttendance"] == 50
    assert overview["classPerformance"] == [{"name": "Math", "average": 85.0}]
    assert overview["averageGrade"] == 85


async def test_empty_school_reports_zeroes(client, seed, as_admin):
    overview = (await client.get("/api/overview", headers=as_admin)).json()["overview"]

    assert overview["totalStudents"] == 0
    assert overview["totalClasses"] == 0
    assert overview["averageAttendance"] == 0
    assert overview["averageGrade"] == 0
    assert overview["classPerformance"] == []
    assert overview["todayAbsences"] == []


async def test_super_admin_sees_every_school(client, seed, school_day, as_super):
    overview = (await client.get("/api/overview", headers=as_super)).json()["overview"]
    assert overview["totalTeachers"] == 3

    scoped = (await client.get(
        "/api/overview", params={"schoolId": seed.school_b.id}, headers=as_super
    )).json()["overview"]
    assert scoped["totalTeachers"] == 1
    assert scoped["totalStudents"] == 0


async def test_school_admin_cannot_read_other_school(client, seed, as_admin):
    resp = await client.get("/api/overview", params={"schoolId": seed.school_b.id}, headers=as_admin)
    assert resp.status_code == 403


async def test_overview_requires_login(client, seed):
    resp = await client.get("/api/overview")
    assert resp.status_code == 401
