"""
Coordinator API endpoints - bulk student registration, companies and resume downloads
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_db
from ..errors import (
    InvalidInputError,
    NotFoundError,
    PersistenceConflictError,
    RowValidationError,
    StructuralInputError,
)
from ..models import Company, CompanyType
from ..repositories import SqlApplicationStore, SqlCompanyStore, SqlStudentStore
from ..schemas.coordinator import (
    BulkRegistrationResponse,
    CleanupReportOut,
    CompanyCreate,
    CompanyDeleteResponse,
    CompanyListResponse,
    CompanyOut,
    CompanyResponse,
    CompanyUpdate,
    DeletedCompanyOut,
    StudentRegistrationError,
    StudentRegistrationResult,
    ZipLinkResponse,
)
from ..services import tabular
from ..services.auth import require_coordinator
from ..services.cloudinary_service import get_object_store
from ..services.company_cleanup import CascadingDeleter
from ..services.resume_archive import ResumeArchiveService, ZipLinkGenerator
from ..services.stores import ObjectStore
from ..services.student_registration import BatchRegistrar

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/api/coordinator",
    tags=["Coordinator"],
    dependencies=[Depends(require_coordinator)],
)

COMPANY_TYPES = [t.value for t in CompanyType]


# ========== Service wiring ==========

def get_registrar(db: AsyncSession = Depends(get_db)) -> BatchRegistrar:
    return BatchRegistrar.with_password_suffix(SqlStudentStore(db), settings.default_password_suffix)


def get_cascading_deleter(
    db: AsyncSession = Depends(get_db),
    object_store: ObjectStore = Depends(get_object_store),
) -> CascadingDeleter:
    return CascadingDeleter(
        SqlCompanyStore(db),
        SqlApplicationStore(db),
        object_store,
        resume_folder=settings.resume_folder,
    )


def get_resume_archive(
    db: AsyncSession = Depends(get_db),
    object_store: ObjectStore = Depends(get_object_store),
) -> ResumeArchiveService:
    return ResumeArchiveService(
        SqlCompanyStore(db),
        SqlApplicationStore(db),
        ZipLinkGenerator(object_store, settings.archive_folder),
        resume_folder=settings.resume_folder,
    )


# ========== Bulk Student Registration ==========

@router.post("/register-students-file", response_model=BulkRegistrationResponse)
async def register_students_from_file(
    file: Optional[UploadFile] = File(None),
    registrar: BatchRegistrar = Depends(get_registrar),
):
    """
    Register students from a CSV or Excel upload.
    Any invalid row rejects the whole file; duplicate emails only fail their own row.
    """
    if file is None or not file.filename:
        raise StructuralInputError("No file uploaded")

    fmt = tabular.format_for_filename(file.filename)

    # Never buffer more than one byte past the limit
    content = await file.read(settings.max_upload_bytes + 1)
    if not content:
        raise StructuralInputError("Empty file not allowed")
    if len(content) > settings.max_upload_bytes:
        raise StructuralInputError(f"File too large (max {settings.max_upload_bytes // (1024 * 1024)}MB)")

    rows = tabular.decode(content, fmt)
    logger.info(f"Parsed {len(rows)} rows from {file.filename}")

    report = await registrar.register_all(rows)
    if not report.all_valid:
        raise RowValidationError("Validation errors found", details=report.rejection_reasons)

    return BulkRegistrationResponse(
        message="Student registration process completed",
        successful=len(report.successes),
        failed=len(report.failures),
        results=[
            StudentRegistrationResult(email=o.email, name=o.name)
            for o in report.successes
        ],
        errors=[
            StudentRegistrationError(email=o.email, name=o.name, error=o.reason or "")
            for o in report.failures
        ],
    )


# ========== Companies ==========

def _check_company_fields(data: CompanyCreate) -> None:
    if data.type and data.type not in COMPANY_TYPES:
        raise InvalidInputError(f"Invalid type. Must be one of: {', '.join(COMPANY_TYPES)}")
    if data.stipend is not None and data.stipend < 0:
        raise InvalidInputError("Stipend must be a positive number")


async def _get_company_or_404(db: AsyncSession, company_id: int) -> Company:
    company = await db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found")
    return company


async def _name_taken(db: AsyncSession, name: str, exclude_id: Optional[int] = None) -> bool:
    query = select(func.count(Company.id)).where(Company.name == name)
    if exclude_id is not None:
        query = query.where(Company.id != exclude_id)
    result = await db.execute(query)
    return (result.scalar() or 0) > 0


@router.post("/company", response_model=CompanyResponse, status_code=201)
async def create_company(data: CompanyCreate, db: AsyncSession = Depends(get_db)):
    """Create a new company for placement"""
    name = (data.name or "").strip()
    description = (data.description or "").strip()
    if not name or not description:
        raise InvalidInputError("Missing required fields: name and description are required")

    _check_company_fields(data)

    if await _name_taken(db, name):
        raise PersistenceConflictError("Company with this name already exists")

    company = Company(
        name=name,
        description=description,
        type=CompanyType(data.type) if data.type else None,
        stipend=data.stipend,
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)

    return CompanyResponse(message="Company created successfully", company=CompanyOut.model_validate(company))


@router.get("/companies", response_model=CompanyListResponse)
async def get_all_companies(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Company).order_by(Company.name))
    companies = result.scalars().all()

    return CompanyListResponse(
        message="Companies retrieved successfully",
        count=len(companies),
        companies=[CompanyOut.model_validate(c) for c in companies],
    )


@router.get("/company/{company_id}", response_model=CompanyResponse)
async def get_company_by_id(company_id: int, db: AsyncSession = Depends(get_db)):
    company = await _get_company_or_404(db, company_id)
    return CompanyResponse(message="Company retrieved successfully", company=CompanyOut.model_validate(company))


@router.put("/company/{company_id}", response_model=CompanyResponse)
async def update_company(company_id: int, data: CompanyUpdate, db: AsyncSession = Depends(get_db)):
    """Update a company - only provided fields change"""
    company = await _get_company_or_404(db, company_id)

    _check_company_fields(data)

    name = (data.name or "").strip()
    if name and name != company.name and await _name_taken(db, name, exclude_id=company_id):
        raise PersistenceConflictError("Company with this name already exists")

    if name:
        company.name = name
    if data.description and data.description.strip():
        company.description = data.description.strip()
    if data.type:
        company.type = CompanyType(data.type)
    if data.stipend is not None:
        company.stipend = data.stipend

    await db.commit()
    await db.refresh(company)

    return CompanyResponse(message="Company updated successfully", company=CompanyOut.model_validate(company))


@router.delete("/company/{company_id}", response_model=CompanyDeleteResponse)
async def delete_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
    deleter: CascadingDeleter = Depends(get_cascading_deleter),
):
    """
    Delete a company, its applications and (best-effort) their resumes in Cloudinary.
    Resume cleanup failures show up in the cleanup counts, never as an error.
    """
    deletion = await deleter.delete_company_cascade(company_id)
    await db.commit()

    cleanup = deletion.cleanup
    return CompanyDeleteResponse(
        message="Company deleted successfully",
        deleted_company=DeletedCompanyOut(
            id=deletion.deleted_company.id,
            name=deletion.deleted_company.name,
        ),
        cleanup=CleanupReportOut(
            dependent_records_deleted=cleanup.dependent_records_deleted,
            resources_requested=cleanup.resources_requested,
            resources_deleted=cleanup.resources_deleted,
        ),
    )


# ========== Resume Downloads ==========

@router.get("/resumes/download-all", response_model=ZipLinkResponse)
async def download_all_resumes_zip(archive: ResumeArchiveService = Depends(get_resume_archive)):
    zip_url = await archive.download_all()
    return ZipLinkResponse(message="Download link generated successfully.", zip_url=zip_url)


@router.get("/resumes/download/{company_id}", response_model=ZipLinkResponse)
async def download_company_resumes_zip(
    company_id: int,
    archive: ResumeArchiveService = Depends(get_resume_archive),
):
    zip_url = await archive.download_for_company(company_id)
    return ZipLinkResponse(message="Download link generated successfully.", zip_url=zip_url)
