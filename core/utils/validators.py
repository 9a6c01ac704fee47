"""Validation utilities for recruitment input."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional, TypeVar

from email_validator import validate_email as _validate_email, EmailNotValidError

from core.exceptions import ValidationError


E = TypeVar("E", bound=Enum)


RESUME_EXTENSIONS: frozenset[str] = frozenset({".pdf", ".doc", ".docx", ".txt"})


def validate_email(email: str) -> tuple[bool, Optional[str]]:
    """
    Validate email address format.
    
    Args:
        email: Email address to validate
        
    Returns:
        Tuple of (is_valid, normalized_email or error_message)
    """
    try:
        validation = _validate_email(email, check_deliverability=False)
        return True, validation.normalized
    except EmailNotValidError as e:
        return False, str(e)


def is_valid_resume_file(filename: str) -> bool:
    """
    Check a resume filename against the allowed extensions.

    Args:
        filename: Original upload filename

    Returns:
        True if the extension is one of .pdf, .doc, .docx, .txt
    """
    return PurePosixPath(filename).suffix.lower() in RESUME_EXTENSIONS


def is_safe_filename(filename: str) -> bool:
    """Reject names that could escape the upload directory."""
    return bool(filename) and ".." not in filename and "/" not in filename and "\\" not in filename


def is_present(value: Any) -> bool:
    """Treat None, empty strings and whitespace-only strings as missing."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def split_skills(skills: Optional[str | list[str]]) -> list[str]:
    """
    Normalize a skills form field into a list.

    Args:
        skills: A list, a comma-separated string, or None

    Returns:
        List of stripped, non-empty skill names
    """
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    return [s.strip() for s in skills if s and s.strip()]


def coerce_enum(enum_cls: type[E], value: Any, label: str = "status") -> E:
    """
    Convert a raw value to a member of a string enum.

    Args:
        enum_cls: Target enum class
        value: Raw value (member or its string value)
        label: Field name used in the error message

    Returns:
        The matching enum member

    Raises:
        ValidationError: If the value is not one of the enum's values
    """
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label}. Must be one of: {allowed}") from None
