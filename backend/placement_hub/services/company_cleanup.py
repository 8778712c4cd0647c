"""
Company deletion with cascading cleanup.

Deleting a company removes its applications and asks Cloudinary to drop the
resumes those applications point at. The database delete is authoritative;
resume cleanup is best-effort and only ever degrades the returned report.
"""
import logging
from typing import Dict

from pydantic import BaseModel

from ..errors import NotFoundError
from .concurrency import settle_all
from .resource_refs import collect_resource_refs
from .stores import ApplicationStore, CompanyStore, DestroyStatus, ObjectStore

logger = logging.getLogger(__name__)

# A resource that is already gone counts as deleted
DELETED_STATUSES = (DestroyStatus.OK, DestroyStatus.NOT_FOUND)


class CleanupReport(BaseModel):
    dependent_records_deleted: int = 0
    resources_requested: int = 0
    resources_deleted: int = 0

    @property
    def complete(self) -> bool:
        return self.resources_deleted == self.resources_requested


class DeletedCompany(BaseModel):
    id: int
    name: str


class CompanyDeletion(BaseModel):
    deleted_company: DeletedCompany
    cleanup: CleanupReport


class CascadingDeleter:
    def __init__(
        self,
        companies: CompanyStore,
        applications: ApplicationStore,
        object_store: ObjectStore,
        resume_folder: str,
    ):
        self.companies = companies
        self.applications = applications
        self.object_store = object_store
        self.resume_folder = resume_folder

    async def delete_company_cascade(self, company_id: int) -> CompanyDeletion:
        company = await self.companies.find_by_id(company_id)
        if company is None:
            raise NotFoundError("Company not found")
        deleted_company = DeletedCompany(id=company.id, name=company.name)

        stored_refs = await self.applications.find_resume_refs(company_id)
        resources = collect_resource_refs(stored_refs, self.resume_folder)
        resources_deleted = await self.destroy_resources(resources)

        # Runs whatever happened above
        dependent_records_deleted = await self.applications.delete_by_company(company_id)
        await self.companies.delete_by_id(company_id)

        cleanup = CleanupReport(
            dependent_records_deleted=dependent_records_deleted,
            resources_requested=len(resources),
            resources_deleted=resources_deleted,
        )
        if not cleanup.complete:
            logger.warning(
                f"Company {company_id} deleted but only {cleanup.resources_deleted} of "
                f"{cleanup.resources_requested} resumes were removed from storage"
            )
        else:
            logger.info(
                f"Company {company_id} deleted with {dependent_records_deleted} applications "
                f"and {resources_deleted} resumes"
            )
        return CompanyDeletion(deleted_company=deleted_company, cleanup=cleanup)

    async def destroy_resources(self, resources: Dict[str, str]) -> int:
        """Destroy every resource concurrently and return how many are gone"""
        settled = await settle_all(
            self.object_store.destroy(storage_id, kind)
            for storage_id, kind in resources.items()
        )

        deleted = 0
        for storage_id, result in zip(resources, settled):
            if not result.ok:
                logger.error(f"Failed to delete Cloudinary resource {storage_id}: {result.error}")
            elif result.value in DELETED_STATUSES:
                deleted += 1
            else:
                logger.error(f"Failed to delete Cloudinary resource {storage_id}: {result.value}")
        return deleted
