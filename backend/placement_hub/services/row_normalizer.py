"""
Row Normalizer - maps an uploaded spreadsheet/CSV row onto student fields.

Coordinators upload sheets with headers like "Student Name", "E-Mail" or
"roll_number". Each canonical field has a list of accepted header aliases in
priority order, and a header is resolved in two passes:

1. exact match after trimming and lower-casing both sides
2. loose match after also stripping every non-alphanumeric character

The first alias that resolves to a non-empty value wins. Normalization never
fails; missing fields come back empty (or ``None`` for the graduation year).
"""
import re
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel

RawRow = Mapping[str, str]

DEFAULT_ROLE = "student"

FIELD_ALIASES: Dict[str, List[str]] = {
    "name": ["name", "full name", "student name"],
    "email": ["email", "e-mail", "mail"],
    "roll_no": ["rollNo", "roll no", "roll", "roll_number", "rollno"],
    "role": ["role"],
    "semester": ["semester", "sem"],
    "course": ["course"],
    "graduation_year": ["graduationYear", "graduation year", "graduation_year", "graduation"],
    "default_resume": ["defaultResume", "resume"],
}

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CanonicalStudentInput(BaseModel):
    """A row with fixed field names. Not validated yet."""
    name: str = ""
    email: str = ""
    roll_no: str = ""
    role: str = DEFAULT_ROLE
    semester: str = ""
    course: str = ""
    graduation_year: Optional[int] = None
    default_resume: str = ""


def _exact_key(header: object) -> str:
    return str(header).strip().lower()


def _loose_key(header: object) -> str:
    return _NON_ALNUM.sub("", _exact_key(header))


def pick(row: RawRow, aliases: List[str]) -> str:
    """Return the trimmed value of the first alias present in the row, or ''"""
    for alias in aliases:
        wanted = _exact_key(alias)
        for header, value in row.items():
            if header and _exact_key(header) == wanted:
                if value not in (None, ""):
                    return str(value).strip()
                break

    # Later headers overwrite earlier ones that collapse to the same key
    loose_row = {_loose_key(header): value for header, value in row.items() if header}
    for alias in aliases:
        wanted = _loose_key(alias)
        value = loose_row.get(wanted)
        if wanted and value not in (None, ""):
            return str(value).strip()

    return ""


def parse_graduation_year(value: str) -> Optional[int]:
    """Leading-integer parse; anything without one (or zero) is treated as absent"""
    match = _LEADING_INT.match(value or "")
    if not match:
        return None
    year = int(match.group(1))
    return year or None


def normalize(row: RawRow) -> CanonicalStudentInput:
    role = pick(row, FIELD_ALIASES["role"]).strip().lower()
    return CanonicalStudentInput(
        name=pick(row, FIELD_ALIASES["name"]),
        email=pick(row, FIELD_ALIASES["email"]),
        roll_no=pick(row, FIELD_ALIASES["roll_no"]),
        role=role or DEFAULT_ROLE,
        semester=pick(row, FIELD_ALIASES["semester"]),
        course=pick(row, FIELD_ALIASES["course"]),
        graduation_year=parse_graduation_year(pick(row, FIELD_ALIASES["graduation_year"])),
        default_resume=pick(row, FIELD_ALIASES["default_resume"]),
    )
