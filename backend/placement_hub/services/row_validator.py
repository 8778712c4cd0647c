"""
Row Validator - row-local checks on a normalized student record.

Only cheap checks live here. Duplicate emails need the database and are
detected when the row is persisted.
"""
from typing import Callable, Optional, Union

from pydantic import BaseModel

from .row_normalizer import CanonicalStudentInput

ALLOWED_ROLES = ("student", "coordinator")

CredentialDeriver = Callable[[str], str]


class ValidatedStudentInput(BaseModel):
    row_index: int
    name: str
    email: str
    roll_no: str = ""
    role: str
    semester: str = ""
    course: str = ""
    graduation_year: Optional[int] = None
    default_resume: str = ""
    initial_password: str


class RowRejection(BaseModel):
    row_index: int
    reason: str


def derive_initial_password(roll_no: str, suffix: str) -> str:
    """Initial credential handed to bulk-registered students: roll number plus a fixed suffix"""
    return f"{roll_no}{suffix}"


def validate(
    record: CanonicalStudentInput,
    row_index: int,
    derive_credential: CredentialDeriver,
) -> Union[ValidatedStudentInput, RowRejection]:
    """
    Check a normalized row.

    Args:
        record: Output of the row normalizer
        row_index: 0-based position of the row in the upload
        derive_credential: Maps a roll number to the initial password

    Returns:
        ValidatedStudentInput, or RowRejection naming the 1-based row
    """
    row_number = row_index + 1
    if not record.name or not record.email:
        return RowRejection(
            row_index=row_index,
            reason=f"Row {row_number}: Missing required fields (name, email)",
        )

    if record.role not in ALLOWED_ROLES:
        return RowRejection(
            row_index=row_index,
            reason=f"Row {row_number}: Invalid role. Must be 'student' or 'coordinator'",
        )

    return ValidatedStudentInput(
        row_index=row_index,
        name=record.name,
        email=record.email,
        roll_no=record.roll_no,
        role=record.role,
        semester=record.semester,
        course=record.course,
        graduation_year=record.graduation_year,
        default_resume=record.default_resume,
        initial_password=derive_credential(record.roll_no),
    )
