"""CSV export of the admin user list."""

import csv
import io
from datetime import datetime
from typing import Iterable

USER_EXPORT_HEADERS = [
    "Full Name",
    "Email",
    "Phone",
    "Role",
    "College/Company",
    "Graduation Year",
    "Skills",
    "LinkedIn",
    "GitHub",
    "Status",
    "Created At",
]


def _date(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value or "")


def users_to_csv(users: Iterable[dict]) -> str:
    """
    Render user rows (profile fields + role + organization_name) as CSV.

    Fields containing commas, quotes or newlines are quoted with inner
    quotes doubled; everything else is written bare.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(USER_EXPORT_HEADERS)
    for user in users:
        writer.writerow([
            user.get("full_name") or "",
            user.get("email") or "",
            user.get("phone") or "",
            user.get("role") or "",
            user.get("organization_name") or user.get("college_name") or "",
            user.get("graduation_year") or "",
            "; ".join(user.get("skills") or []),
            user.get("linkedin_url") or "",
            user.get("github_url") or "",
            "Active" if user.get("is_active") else "Inactive",
            _date(user.get("created_at")),
        ])
    return buffer.getvalue()
