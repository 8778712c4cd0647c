"""
Bulk student registration from uploaded rows.

Two phases with different failure policies:

* validation is all-or-nothing: one bad row rejects the whole upload and
  nothing is written
* persistence is per row: a duplicate email or any other write failure
  fails that row only, and the remaining rows are still inserted
"""
import logging
from functools import partial
from typing import List, Optional, Sequence

from pydantic import BaseModel

from ..errors import PersistenceError
from .row_normalizer import RawRow, normalize
from .row_validator import (
    CredentialDeriver,
    RowRejection,
    ValidatedStudentInput,
    derive_initial_password,
    validate,
)
from .stores import StudentStore

logger = logging.getLogger(__name__)

SUCCESS = "success"
FAILED = "failed"


class RegistrationOutcome(BaseModel):
    row_index: int
    email: str
    name: str
    status: str
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS


class RegistrationReport(BaseModel):
    all_valid: bool
    rejections: List[RowRejection] = []
    outcomes: List[RegistrationOutcome] = []

    @property
    def successes(self) -> List[RegistrationOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failures(self) -> List[RegistrationOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def rejection_reasons(self) -> List[str]:
        return [r.reason for r in self.rejections]


class BatchRegistrar:
    """Normalize, validate and persist a batch of uploaded student rows."""

    def __init__(self, store: StudentStore, derive_credential: CredentialDeriver):
        self.store = store
        self.derive_credential = derive_credential

    @classmethod
    def with_password_suffix(cls, store: StudentStore, suffix: str) -> "BatchRegistrar":
        return cls(store, partial(derive_initial_password, suffix=suffix))

    def validate_all(self, rows: Sequence[RawRow]):
        accepted: List[ValidatedStudentInput] = []
        rejections: List[RowRejection] = []
        for index, row in enumerate(rows):
            result = validate(normalize(row), index, self.derive_credential)
            if isinstance(result, RowRejection):
                rejections.append(result)
            else:
                accepted.append(result)
        return accepted, rejections

    async def register_all(self, rows: Sequence[RawRow]) -> RegistrationReport:
        accepted, rejections = self.validate_all(rows)
        if rejections:
            logger.info(f"Rejected upload of {len(rows)} rows: {len(rejections)} invalid")
            return RegistrationReport(all_valid=False, rejections=rejections)

        outcomes: List[RegistrationOutcome] = []
        for record in accepted:
            try:
                await self.store.insert(record)
            except PersistenceError as e:
                outcomes.append(RegistrationOutcome(
                    row_index=record.row_index,
                    email=record.email,
                    name=record.name,
                    status=FAILED,
                    reason=e.message,
                ))
                continue
            outcomes.append(RegistrationOutcome(
                row_index=record.row_index,
                email=record.email,
                name=record.name,
                status=SUCCESS,
            ))

        report = RegistrationReport(all_valid=True, outcomes=outcomes)
        logger.info(
            f"Registered {len(report.successes)} of {len(rows)} students "
            f"({len(report.failures)} failed)"
        )
        return report
