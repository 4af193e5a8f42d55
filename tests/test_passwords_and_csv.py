import csv
import io
from datetime import datetime

import pytest

from eventgo.core.passwords import password_strength, validate_password
from eventgo.services.csv_export import USER_EXPORT_HEADERS, users_to_csv


@pytest.mark.parametrize("password, message", [
    ("Ab1", "Password must be at least 8 characters long"),
    ("ABCDEFG1", "Password must contain at least one lowercase letter"),
    ("abcdefg1", "Password must contain at least one uppercase letter"),
    ("Abcdefgh", "Password must contain at least one number"),
])
def test_validate_password_rejects(password, message):
    assert validate_password(password) == (False, message)


def test_validate_password_accepts():
    ok, _ = validate_password("Secret123")
    assert ok


@pytest.mark.parametrize("password, label", [
    ("short1A", "weak"),
    ("lowercase", "weak"),
    ("Lowercase", "medium"),
    ("Secret123", "medium"),
    ("Secret123!", "strong"),
    ("LongerSecret1", "strong"),
])
def test_password_strength(password, label):
    assert password_strength(password) == label


def test_users_to_csv_quotes_only_when_needed():
    text = users_to_csv([
        {
            "full_name": 'Priya "PJ" Joshi, Jr',
            "email": "priya@campus.io",
            "role": "student",
            "college_name": "Campus Institute",
            "graduation_year": 2026,
            "skills": ["Python", "SQL"],
            "is_active": True,
            "created_at": datetime(2026, 3, 4, 10, 30),
        },
        {"full_name": "Acme HR", "email": "hr@acme.io", "role": "company", "organization_name": "Acme Labs",
         "is_active": False},
    ])

    lines = text.splitlines()
    assert lines[0] == ",".join(USER_EXPORT_HEADERS)
    assert lines[1].startswith('"Priya ""PJ"" Joshi, Jr",priya@campus.io,')
    assert lines[2].startswith("Acme HR,hr@acme.io,,company,Acme Labs,")

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1][5] == "2026"
    assert rows[1][6] == "Python; SQL"
    assert rows[1][10] == "2026-03-04"
    assert rows[2][9] == "Inactive"
    assert rows[2][10] == ""
