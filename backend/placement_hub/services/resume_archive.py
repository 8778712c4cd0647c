"""
Resume downloads - bundle stored resumes into a single Cloudinary zip link.
"""
import re
from typing import Iterable

from ..errors import NotFoundError
from .resource_refs import DEFAULT_KIND, collect_resource_refs
from .stores import ApplicationStore, CompanyStore, ObjectStore

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^A-Za-z0-9_\-]")


def sanitize_archive_name(name: str, fallback: str = "resumes") -> str:
    """Whitespace runs become '_', anything else outside [A-Za-z0-9_-] is dropped"""
    token = _UNSAFE.sub("", _WHITESPACE.sub("_", name.strip()))
    return token or fallback


class ZipLinkGenerator:
    def __init__(self, object_store: ObjectStore, archive_folder: str):
        self.object_store = object_store
        self.archive_folder = archive_folder.strip("/")

    def generate_zip_link(self, resource_ids: Iterable[str], archive_name: str) -> str:
        ids = list(dict.fromkeys(resource_ids))
        if not ids:
            raise NotFoundError("No resumes to download")
        target = sanitize_archive_name(archive_name)
        if self.archive_folder:
            target = f"{self.archive_folder}/{target}"
        # Resumes (PDF/DOC) are stored as raw resources
        return self.object_store.build_zip_link(ids, DEFAULT_KIND, target)


class ResumeArchiveService:
    """Works out which resumes to bundle, then asks the ZipLinkGenerator for a link"""

    def __init__(
        self,
        companies: CompanyStore,
        applications: ApplicationStore,
        zip_links: ZipLinkGenerator,
        resume_folder: str,
    ):
        self.companies = companies
        self.applications = applications
        self.zip_links = zip_links
        self.resume_folder = resume_folder

    async def download_all(self) -> str:
        stored_refs = await self.applications.find_resume_refs()
        return self._link_for(
            stored_refs,
            archive_name="all_resumes",
            empty_message="No resumes found.",
            invalid_message=f"No valid resumes found in {self.resume_folder}.",
        )

    async def download_for_company(self, company_id: int) -> str:
        company = await self.companies.find_by_id(company_id)
        if company is None:
            raise NotFoundError("Company not found")

        stored_refs = await self.applications.find_resume_refs(company_id)
        return self._link_for(
            stored_refs,
            archive_name=f"{company.name}_resumes",
            empty_message="No resumes found for this company.",
            invalid_message=f"No valid resumes found in {self.resume_folder} for this company.",
        )

    def _link_for(
        self,
        stored_refs: list,
        archive_name: str,
        empty_message: str,
        invalid_message: str,
    ) -> str:
        if not stored_refs:
            raise NotFoundError(empty_message)
        resources = collect_resource_refs(stored_refs, self.resume_folder)
        if not resources:
            raise NotFoundError(invalid_message)
        return self.zip_links.generate_zip_link(resources.keys(), archive_name)
