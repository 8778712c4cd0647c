import io
import os
import tempfile

# Settings are read at import time, so the test environment goes in first
_DB_DIR = tempfile.mkdtemp(prefix="placement_hub_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["CLOUDINARY_API_KEY"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""

import openpyxl  # noqa: E402
import pytest  # noqa: E402

from placement_hub.models import Company  # noqa: E402

from .fakes import (  # noqa: E402
    FakeApplicationStore,
    FakeCompanyStore,
    FakeObjectStore,
    FakeStudentStore,
)


@pytest.fixture
def student_store() -> FakeStudentStore:
    return FakeStudentStore()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def acme() -> Company:
    return Company(id=1, name="Acme Corp", description="Widgets")


@pytest.fixture
def company_store(acme) -> FakeCompanyStore:
    return FakeCompanyStore([acme])


@pytest.fixture
def application_store() -> FakeApplicationStore:
    return FakeApplicationStore()


@pytest.fixture
def make_xlsx():
    """Build an .xlsx file in memory from a header row and data rows."""
    def _make(rows) -> bytes:
        wb = openpyxl.Workbook()
        ws = wb.active
        for row in rows:
            ws.append(list(row))
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
    return _make
