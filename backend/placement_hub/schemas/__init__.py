from .coordinator import (
    CompanyCreate, CompanyUpdate, CompanyOut, CompanyResponse, CompanyListResponse,
    DeletedCompanyOut, CleanupReportOut, CompanyDeleteResponse,
    StudentRegistrationResult, StudentRegistrationError, BulkRegistrationResponse,
    ZipLinkResponse,
)

__all__ = [
    "CompanyCreate", "CompanyUpdate", "CompanyOut", "CompanyResponse", "CompanyListResponse",
    "DeletedCompanyOut", "CleanupReportOut", "CompanyDeleteResponse",
    "StudentRegistrationResult", "StudentRegistrationError", "BulkRegistrationResponse",
    "ZipLinkResponse",
]
