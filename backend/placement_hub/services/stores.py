"""
Contracts the coordinator services depend on.

The SQLAlchemy repositories and the Cloudinary object store implement these;
tests substitute in-memory fakes.
"""
import enum
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..models import Company, Student
from .row_validator import ValidatedStudentInput


class DestroyStatus(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


class StudentStore(ABC):
    @abstractmethod
    async def insert(self, record: ValidatedStudentInput) -> Student:
        """Persist one validated student.

        Raises:
            PersistenceConflictError: if the email is already registered.
            PersistenceError: if the row could not be written for another reason.
        """


class CompanyStore(ABC):
    @abstractmethod
    async def find_by_id(self, company_id: int) -> Optional[Company]:
        """Return the company or None."""

    @abstractmethod
    async def delete_by_id(self, company_id: int) -> None:
        """Remove the company record."""


class ApplicationStore(ABC):
    @abstractmethod
    async def find_resume_refs(self, company_id: Optional[int] = None) -> List[Optional[str]]:
        """Stored resume reference of every application, one entry per application.

        Args:
            company_id: Restrict to one company; None means all applications.
        """

    @abstractmethod
    async def delete_by_company(self, company_id: int) -> int:
        """Remove every application for the company and return how many went."""


class ObjectStore(ABC):
    @abstractmethod
    async def destroy(self, storage_id: str, kind: str) -> DestroyStatus:
        """Delete one stored resource. May raise; callers treat that as ERROR."""

    @abstractmethod
    def build_zip_link(self, storage_ids: Iterable[str], kind: str, archive_name: str) -> str:
        """Ask the provider for a download link bundling the resources into one zip.

        Raises:
            ObjectStoreUnavailableError: if the provider cannot be used.
        """
