import httpx
import pytest

from placement_hub.database import Base, async_session_maker, engine
from placement_hub.main import app
from placement_hub.models import Application, Company, CompanyType, Student, StudentRole
from placement_hub.services.auth import create_access_token, get_password_hash
from placement_hub.services.cloudinary_service import get_object_store

from tests.fakes import FakeObjectStore


@pytest.fixture
async def db_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest.fixture
async def session(db_tables):
    async with async_session_maker() as s:
        yield s


async def _add_user(session, email: str, role: StudentRole) -> Student:
    user = Student(
        name=email.split("@")[0],
        email=email,
        hashed_password=get_password_hash("secret"),
        role=role,
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def coordinator(session) -> Student:
    return await _add_user(session, "tpo@college.edu", StudentRole.COORDINATOR)


@pytest.fixture
async def plain_student(session) -> Student:
    return await _add_user(session, "someone@college.edu", StudentRole.STUDENT)


@pytest.fixture
def auth_headers(coordinator) -> dict:
    token = create_access_token({"sub": str(coordinator.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_store():
    store = FakeObjectStore()
    app.dependency_overrides[get_object_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_object_store, None)


@pytest.fixture
async def client(db_tables, fake_store):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def add_company(session):
    async def _add(name: str, description: str = "Hiring", type=CompanyType.ONSITE, stipend=None) -> Company:
        company = Company(name=name, description=description, type=type, stipend=stipend)
        session.add(company)
        await session.commit()
        return company
    return _add


@pytest.fixture
def add_application(session, coordinator):
    async def _add(company: Company, resume) -> Application:
        application = Application(student_id=coordinator.id, company_id=company.id, resume=resume)
        session.add(application)
        await session.commit()
        return application
    return _add
