from .row_normalizer import (
    CanonicalStudentInput,
    FIELD_ALIASES,
    normalize,
)
from .row_validator import (
    ValidatedStudentInput,
    RowRejection,
    derive_initial_password,
    validate,
)
from .student_registration import (
    BatchRegistrar,
    RegistrationOutcome,
    RegistrationReport,
)
from .resource_refs import (
    ResourceRef,
    extract,
    collect_resource_refs,
)
from .concurrency import Settled, settle_all
from .company_cleanup import CascadingDeleter, CleanupReport, CompanyDeletion
from .resume_archive import ZipLinkGenerator, ResumeArchiveService, sanitize_archive_name

__all__ = [
    # Bulk registration
    "CanonicalStudentInput",
    "FIELD_ALIASES",
    "normalize",
    "ValidatedStudentInput",
    "RowRejection",
    "derive_initial_password",
    "validate",
    "BatchRegistrar",
    "RegistrationOutcome",
    "RegistrationReport",
    # Resume storage
    "ResourceRef",
    "extract",
    "collect_resource_refs",
    "Settled",
    "settle_all",
    "CascadingDeleter",
    "CleanupReport",
    "CompanyDeletion",
    "ZipLinkGenerator",
    "ResumeArchiveService",
    "sanitize_archive_name",
]
