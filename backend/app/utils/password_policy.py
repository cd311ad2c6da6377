"""
Password Policy Utilities
Provides password validation rules.
"""

import re
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = 8
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = True

    @classmethod
    def from_settings(cls, settings) -> "PasswordPolicy":
        return cls(
            min_length=settings.password_min_length,
            require_digit=settings.password_require_digit,
            require_lowercase=settings.password_require_lowercase,
            require_uppercase=settings.password_require_uppercase,
            require_non_alphanumeric=settings.password_require_non_alphanumeric,
        )


def validate_password(password: str, policy: PasswordPolicy = PasswordPolicy()) -> List[str]:
    """
    Validate password strength and return a list of errors.
    """
    errors: List[str] = []

    if not password:
        return ["Password is required"]

    if len(password) < policy.min_length:
        errors.append(f"Password must be at least {policy.min_length} characters long")

    if policy.require_lowercase and not re.search(r"[a-z]", password):
        errors.append("Password must include a lowercase letter")

    if policy.require_uppercase and not re.search(r"[A-Z]", password):
        errors.append("Password must include an uppercase letter")

    if policy.require_digit and not re.search(r"\d", password):
        errors.append("Password must include a number")

    if policy.require_non_alphanumeric and not re.search(r"[^A-Za-z0-9]", password):
        errors.append("Password must include a symbol")

    return errors
