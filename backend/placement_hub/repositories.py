"""
SQLAlchemy-backed stores used by the coordinator services.
"""
import asyncio
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import PersistenceConflictError, PersistenceError
from .models import Application, Company, Student, StudentRole
from .services.auth import get_password_hash
from .services.row_validator import ValidatedStudentInput
from .services.stores import ApplicationStore, CompanyStore, StudentStore


class SqlStudentStore(StudentStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, record: ValidatedStudentInput) -> Student:
        # Each student commits on its own so a duplicate only fails its row
        hashed_password = await asyncio.to_thread(get_password_hash, record.initial_password)
        student = Student(
            name=record.name,
            email=record.email,
            hashed_password=hashed_password,
            role=StudentRole(record.role),
            roll_no=record.roll_no,
            semester=record.semester,
            course=record.course,
            graduation_year=record.graduation_year,
            default_resume=record.default_resume,
            profile_is_completed=bool(record.default_resume),
        )
        self.db.add(student)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise PersistenceConflictError(
                f"Student with email {record.email} already exists"
            ) from e
        except SQLAlchemyError as e:
            # e.g. a value longer than its column on PostgreSQL
            await self.db.rollback()
            raise PersistenceError(f"Could not save student {record.email}: {e.__class__.__name__}") from e
        return student


class SqlCompanyStore(CompanyStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, company_id: int) -> Optional[Company]:
        return await self.db.get(Company, company_id)

    async def delete_by_id(self, company_id: int) -> None:
        await self.db.execute(delete(Company).where(Company.id == company_id))


class SqlApplicationStore(ApplicationStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_resume_refs(self, company_id: Optional[int] = None) -> List[Optional[str]]:
        query = select(Application.resume).order_by(Application.id)
        if company_id is not None:
            query = query.where(Application.company_id == company_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete_by_company(self, company_id: int) -> int:
        result = await self.db.execute(
            delete(Application).where(Application.company_id == company_id)
        )
        return result.rowcount or 0
