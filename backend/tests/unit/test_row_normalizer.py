from placement_hub.services.row_normalizer import (
    CanonicalStudentInput,
    normalize,
    parse_graduation_year,
    pick,
)


class TestHeaderMatching:
    def test_canonical_headers(self) -> None:
        result = normalize({
            "name": "Asha",
            "email": "asha@x.com",
            "rollNo": "21CS001",
            "role": "student",
            "semester": "6",
            "course": "B.Tech",
            "graduationYear": "2026",
            "defaultResume": "https://example.com/cv.pdf",
        })

        assert result == CanonicalStudentInput(
            name="Asha",
            email="asha@x.com",
            roll_no="21CS001",
            role="student",
            semester="6",
            course="B.Tech",
            graduation_year=2026,
            default_resume="https://example.com/cv.pdf",
        )

    def test_header_variants_map_to_name_and_email(self) -> None:
        result = normalize({"Student Name": "Asha", "E-Mail": "asha@x.com"})

        assert result.name == "Asha"
        assert result.email == "asha@x.com"

    def test_exact_match_ignores_case_and_padding(self) -> None:
        result = normalize({"  FULL NAME ": "Asha", "MAIL": "asha@x.com"})

        assert result.name == "Asha"
        assert result.email == "asha@x.com"

    def test_loose_match_strips_punctuation(self) -> None:
        result = normalize({
            "Roll-No.": "21CS001",
            "Graduation (Year)": "2025",
            "E_mail": "asha@x.com",
        })

        assert result.roll_no == "21CS001"
        assert result.graduation_year == 2025
        assert result.email == "asha@x.com"

    def test_alias_priority_order(self) -> None:
        result = normalize({"student name": "Second", "name": "First"})

        assert result.name == "First"

    def test_empty_value_falls_through_to_next_alias(self) -> None:
        result = normalize({"email": "", "mail": "asha@x.com"})

        assert result.email == "asha@x.com"

    def test_values_are_trimmed(self) -> None:
        result = normalize({"name": "  Asha  ", "course": " MCA "})

        assert result.name == "Asha"
        assert result.course == "MCA"

    def test_pick_returns_empty_when_nothing_matches(self) -> None:
        assert pick({"phone": "123"}, ["email", "mail"]) == ""

    def test_later_header_wins_when_loose_keys_collide(self) -> None:
        assert pick({"Roll No": "", "roll-no": "B"}, ["rollno"]) == "B"


class TestDefaults:
    def test_missing_fields_are_empty(self) -> None:
        result = normalize({})

        assert result.name == ""
        assert result.email == ""
        assert result.roll_no == ""
        assert result.graduation_year is None
        assert result.role == "student"

    def test_role_defaults_to_student_when_blank(self) -> None:
        assert normalize({"role": "   "}).role == "student"

    def test_role_is_lowercased_and_trimmed(self) -> None:
        assert normalize({"Role": " Coordinator "}).role == "coordinator"

    def test_unknown_role_is_kept_for_validation(self) -> None:
        assert normalize({"role": "Admin"}).role == "admin"


class TestGraduationYear:
    def test_plain_integer(self) -> None:
        assert parse_graduation_year("2025") == 2025

    def test_leading_integer_of_decimal(self) -> None:
        assert parse_graduation_year("2025.0") == 2025

    def test_non_numeric_is_absent(self) -> None:
        assert parse_graduation_year("next year") is None

    def test_zero_is_absent(self) -> None:
        assert parse_graduation_year("0") is None

    def test_empty_is_absent(self) -> None:
        assert parse_graduation_year("") is None

    def test_normalize_never_raises_on_bad_year(self) -> None:
        assert normalize({"graduation year": "n/a"}).graduation_year is None


def test_normalize_is_deterministic() -> None:
    row = {"Student Name": "Asha", "E-Mail": "asha@x.com", "Sem": "4"}

    assert normalize(row) == normalize(row)
