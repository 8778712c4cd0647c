from pydantic import BaseModel, Field
from typing import Optional, List
from ..models.company import CompanyType


# ========== Companies ==========

class CompanyCreate(BaseModel):
    # Required-ness is checked in the router so the error names the missing fields
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    stipend: Optional[float] = None


class CompanyUpdate(CompanyCreate):
    pass


class CompanyOut(BaseModel):
    id: int
    name: str
    description: str
    type: Optional[CompanyType] = None
    stipend: Optional[float] = None

    class Config:
        from_attributes = True


class CompanyResponse(BaseModel):
    message: str
    company: CompanyOut


class CompanyListResponse(BaseModel):
    message: str
    count: int
    companies: List[CompanyOut]


class DeletedCompanyOut(BaseModel):
    id: int
    name: str


class CleanupReportOut(BaseModel):
    dependent_records_deleted: int = Field(alias="dependentRecordsDeleted")
    resources_requested: int = Field(alias="resourcesRequested")
    resources_deleted: int = Field(alias="resourcesDeleted")

    class Config:
        populate_by_name = True


class CompanyDeleteResponse(BaseModel):
    message: str
    deleted_company: DeletedCompanyOut = Field(alias="deletedCompany")
    cleanup: CleanupReportOut

    class Config:
        populate_by_name = True


# ========== Bulk student registration ==========

class StudentRegistrationResult(BaseModel):
    email: str
    name: str
    status: str = "success"


class StudentRegistrationError(BaseModel):
    email: str
    name: str
    error: str
    status: str = "failed"


class BulkRegistrationResponse(BaseModel):
    message: str
    successful: int
    failed: int
    results: List[StudentRegistrationResult]
    errors: List[StudentRegistrationError]


# ========== Resume downloads ==========

class ZipLinkResponse(BaseModel):
    message: str
    zip_url: str = Field(alias="zipUrl")

    class Config:
        populate_by_name = True
