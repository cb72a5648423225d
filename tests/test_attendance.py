# tests/test_attendance.py
import pytest
from sqlalchemy import select

from schooldesk.models import AttendanceRecord
from tests.helpers import auth_headers, create_class, create_student, enroll

pytestmark = pytest.mark.anyio


@pytest.fixture
async def roster(client, seed, as_admin):
    """A class taught by teacher_a with two enrolled students"""
    class_ = await create_class(client, as_admin, "Geography", seed.teacher_a.id)
    ada = await create_student(client, as_admin, "Ada", "Lovelace")
    ben = await create_student(client, as_admin, "Ben", "Franklin")
    for student in (ada, ben):
        await enroll(client, as_admin, class_["id"], student["id"])
    return class_, ada, ben


def mark(class_id, on, **statuses):
    return {
        "classId": class_id,
        "date": on,
        "records": [{"studentId": sid, "status": status} for sid, status in statuses.values()],
    }


async def test_marking_twice_keeps_latest_statuses(client, roster, as_teacher, session_factory):
    class_, ada, ben = roster

    first = await client.put(
        "/api/attendance",
        json=mark(class_["id"], "2024-09-02", a=(ada["id"], "present"), b=(ben["id"], "absent")),
        headers=as_teacher,
    )
    assert first.status_code == 200, first.text

    second = await client.put(
        "/api/attendance",
        json=mark(class_["id"], "2024-09-02", a=(ada["id"], "late"), b=(ben["id"], "present")),
        headers=as_teacher,
    )

    assert second.status_code == 200
    assert {r["student_id"]: r["status"] for r in second.json()["attendance"]} == {
        ada["id"]: "late",
        ben["id"]: "present",
    }
    async with session_factory() as session:
        rows = (await session.scalars(select(AttendanceRecord))).all()
        assert len(rows) == 2
        assert {r.student_id: r.status.value for r in rows} == {ada["id"]: "late", ben["id"]: "present"}


async def test_marking_other_date_leaves_existing_rows(client, roster, as_teacher, session_factory):
    class_, ada, ben = roster
    await client.put("/api/attendance", json=mark(class_["id"], "2024-09-02", a=(ada["id"], "present")), headers=as_teacher)
    await client.put("/api/attendance", json=mark(class_["id"], "2024-09-03", a=(ada["id"], "absent")), headers=as_teacher)

    async with session_factory() as session:
        rows = (await session.scalars(select(AttendanceRecord).order_by(AttendanceRecord.date))).all()
        assert [r.status.value for r in rows] == ["present", "absent"]


async def test_get_attendance_lists_every_enrolled_student(client, roster, as_teacher):
    class_, ada, ben = roster
    await client.put("/api/attendance", json=mark(class_["id"], "2024-09-02", a=(ada["id"], "absent")), headers=as_teacher)

    resp = await client.get("/api/attendance", params={"classId": class_["id"], "date": "2024-09-02"}, headers=as_teacher)

    assert resp.status_code == 200
    sheet = resp.json()["attendance"]
    # Ordered by last name: Franklin before Lovelace
    assert [(r["student_id"], r["status"]) for r in sheet] == [(ben["id"], None), (ada["id"], "absent")]


async def test_unenrolled_student_is_rejected(client, seed, roster, as_admin, as_teacher, session_factory):
    class_, ada, _ = roster
    stranger = await create_student(client, as_admin, "Sid", "Stranger")

    resp = await client.put(
        "/api/attendance",
        json=mark(class_["id"], "2024-09-02", a=(ada["id"], "present"), s=(stranger["id"], "present")),
        headers=as_teacher,
    )

    assert resp.status_code == 400
    assert str(stranger["id"]) in resp.json()["error"]
    async with session_factory() as session:
        assert (await session.scalars(select(AttendanceRecord))).all() == []


async def test_duplicate_student_in_request_is_rejected(client, roster, as_teacher):
    class_, ada, _ = roster
    body = {
        "classId": class_["id"],
        "date": "2024-09-02",
        "records": [
            {"studentId": ada["id"], "status": "present"},
            {"studentId": ada["id"], "status": "absent"},
        ],
    }
    resp = await client.put("/api/attendance", json=body, headers=as_teacher)
    assert resp.status_code == 400


async def test_unknown_status_is_rejected(client, roster, as_teacher):
    class_, ada, _ = roster
    resp = await client.put(
        "/api/attendance", json=mark(class_["id"], "2024-09-02", a=(ada["id"], "sleeping")), headers=as_teacher
    )
    assert resp.status_code == 400


async def test_teacher_of_another_class_is_forbidden(client, seed, roster):
    class_, ada, _ = roster
    other_teacher = auth_headers(seed.teacher_a2)

    resp = await client.put(
        "/api/attendance", json=mark(class_["id"], "2024-09-02", a=(ada["id"], "present")), headers=other_teacher
    )
    assert resp.status_code == 403

    resp = await client.get("/api/attendance", params={"classId": class_["id"], "date": "2024-09-02"}, headers=other_teacher)
    assert resp.status_code == 403


async def test_unknown_class_is_404(client, seed, as_admin):
    resp = await client.get("/api/attendance", params={"classId": 999, "date": "2024-09-02"}, headers=as_admin)
    assert resp.status_code == 404


async def test_summary_counts_present_per_date(client, roster, as_teacher):
    class_, ada, ben = roster
    await client.put(
        "/api/attendance",
        json=mark(class_["id"], "2024-09-03", a=(ada["id"], "present"), b=(ben["id"], "late")),
        headers=as_teacher,
    )
    await client.put(
        "/api/attendance",
        json=mark(class_["id"], "2024-09-02", a=(ada["id"], "present"), b=(ben["id"], "present")),
        headers=as_teacher,
    )

    resp = await client.get("/api/attendance/summary", params={"classId": class_["id"]}, headers=as_teacher)

    assert resp.status_code == 200
    assert resp.json()["summary"] == [
        {"date": "2024-09-02", "presentCount": 2, "totalCount": 2},
        {"date": "2024-09-03", "presentCount": 1, "totalCount": 2},
    ]

    resp = await client.get(
        "/api/attendance/summary",
        params={"classId": class_["id"], "start": "2024-09-03"},
        headers=as_teacher,
    )
    assert [d["date"] for d in resp.json()["summary"]] == ["2024-09-03"]


async def test_summary_rejects_inverted_range(client, roster, as_teacher):
    class_, _, _ = roster
    resp = await client.get(
        "/api/attendance/summary",
        params={"classId": class_["id"], "start": "2024-09-05", "end": "2024-09-01"},
        headers=as_teacher,
    )
    assert resp.status_code == 400
