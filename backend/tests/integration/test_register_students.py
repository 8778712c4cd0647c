from sqlalchemy import select
from starlette.datastructures import UploadFile

from placement_hub.models import Student, StudentRole
from placement_hub.routers import coordinators
from placement_hub.services.auth import verify_password

URL = "/api/coordinator/register-students-file"


def _csv(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


async def _students(session):
    result = await session.execute(
        select(Student).where(Student.role == StudentRole.STUDENT).order_by(Student.id)
    )
    return result.scalars().all()


async def test_valid_csv_registers_every_row(client, auth_headers, session) -> None:
    content = _csv(
        "Student Name,E-Mail,Roll No,Semester,Course,Graduation Year",
        "Asha Rao,asha@college.edu,21CS001,6,B.Tech,2025",
        "Ravi Kumar,ravi@college.edu,21CS002,6,B.Tech,2025 batch",
    )

    response = await client.post(URL, files={"file": ("batch.csv", content, "text/csv")}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Student registration process completed"
    assert body["successful"] == 2
    assert body["failed"] == 0
    assert [r["email"] for r in body["results"]] == ["asha@college.edu", "ravi@college.edu"]

    students = await _students(session)
    assert [s.email for s in students] == ["asha@college.edu", "ravi@college.edu"]
    assert students[1].graduation_year == 2025
    assert verify_password("21CS001@007", students[0].hashed_password)


async def test_invalid_row_rejects_the_whole_file(client, auth_headers, session) -> None:
    content = _csv(
        "name,email,role",
        "Asha Rao,asha@college.edu,student",
        "Ravi Kumar,,student",
        "Meera Iyer,meera@college.edu,admin",
    )

    response = await client.post(URL, files={"file": ("batch.csv", content, "text/csv")}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {
        "error": "Validation errors found",
        "details": [
            "Row 2: Missing required fields (name, email)",
            "Row 3: Invalid role. Must be 'student' or 'coordinator'",
        ],
    }
    assert await _students(session) == []


async def test_duplicate_email_fails_only_its_row(client, auth_headers, session) -> None:
    content = _csv(
        "name,email,rollNo",
        "Asha Rao,asha@college.edu,1",
        "Asha Again,asha@college.edu,2",
        "Ravi Kumar,ravi@college.edu,3",
    )

    response = await client.post(URL, files={"file": ("batch.csv", content, "text/csv")}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["successful"] == 2
    assert body["failed"] == 1
    assert body["errors"][0]["name"] == "Asha Again"
    assert body["errors"][0]["status"] == "failed"
    assert "already exists" in body["errors"][0]["error"]
    assert [s.email for s in await _students(session)] == ["asha@college.edu", "ravi@college.edu"]


async def test_xlsx_upload(client, auth_headers, make_xlsx, session) -> None:
    content = make_xlsx([
        ["Full Name", "Email", "Roll", "Graduation Year"],
        ["Asha Rao", "asha@college.edu", 1001, 2026],
    ])

    response = await client.post(
        URL,
        files={"file": ("batch.xlsx", content, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    students = await _students(session)
    assert students[0].roll_no == "1001"
    assert verify_password("1001@007", students[0].hashed_password)


async def test_unsupported_extension(client, auth_headers) -> None:
    response = await client.post(URL, files={"file": ("batch.txt", b"name,email\n", "text/plain")}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Unsupported file format. Please upload CSV or Excel file."


async def test_missing_file(client, auth_headers) -> None:
    response = await client.post(URL, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"


async def test_empty_file(client, auth_headers) -> None:
    response = await client.post(URL, files={"file": ("batch.csv", b"", "text/csv")}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Empty file not allowed"


async def test_long_roll_number_is_registered_with_its_batch(client, auth_headers, session) -> None:
    long_roll = "R" * 80
    content = _csv(
        "name,email,rollNo",
        "Asha Rao,asha@college.edu,1",
        f"Ravi Kumar,ravi@college.edu,{long_roll}",
        "Meera Iyer,meera@college.edu,3",
    )

    response = await client.post(URL, files={"file": ("batch.csv", content, "text/csv")}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["successful"] + body["failed"] == 3
    assert body["successful"] == 3
    students = await _students(session)
    assert verify_password(f"{long_roll}@007", students[1].hashed_password)


async def test_oversized_file_is_read_only_up_to_the_limit(client, auth_headers, monkeypatch) -> None:
    monkeypatch.setattr(coordinators.settings, "max_upload_bytes", 16)
    read_sizes = []
    original_read = UploadFile.read

    async def recording_read(self, size=-1):
        read_sizes.append(size)
        return await original_read(self, size)

    monkeypatch.setattr(UploadFile, "read", recording_read)
    content = _csv("name,email", *[f"S{i},s{i}@college.edu" for i in range(50)])

    response = await client.post(URL, files={"file": ("batch.csv", content, "text/csv")}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large")
    assert read_sizes and all(size == 17 for size in read_sizes)
