"""
Password strength rules.

A password is accepted when it is at least 8 characters long and contains
a lowercase letter, an uppercase letter and a digit.
"""

import re
from typing import Tuple

MIN_PASSWORD_LENGTH = 8


def validate_password(password: str) -> Tuple[bool, str]:
    """Return (is_valid, message) for a candidate password."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not re.search(r"[a-z]", password):
        return False, "Password must contain at least one lowercase letter"
    if not re.search(r"[A-Z]", password):
        return False, "Password must contain at least one uppercase letter"
    if not re.search(r"\d", password):
        return False, "Password must contain at least one number"
    return True, "Password is strong"


def password_strength(password: str) -> str:
    """Rough strength label: 'weak', 'medium' or 'strong'."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return "weak"

    score = 0
    if re.search(r"[a-z]", password):
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"\d", password):
        score += 1
    if re.search(r"[^a-zA-Z0-9]", password):
        score += 1
    if len(password) >= 12:
        score += 1

    if score >= 4:
        return "strong"
    if score >= 2:
        return "medium"
    return "weak"
