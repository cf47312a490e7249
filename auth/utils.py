import re
from typing import Tuple, Optional

from flask_jwt_extended import get_jwt_identity

EMAIL_REGEX = re.compile(r"^[\w\.-]+@[\w\.-]+\.\w+$")


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """Simple email validation.

    Returns (is_valid, error_message)."""
    if not email:
        return False, "Email is required"
    if not isinstance(email, str):
        return False, "Invalid email format"
    if not EMAIL_REGEX.match(email):
        return False, "Invalid email format"
    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """Ensure password meets minimum requirements.

    Requirements:
    * At least 8 characters
    * Contains a letter and a digit
    """
    if not password:
        return False, "Password is required"
    if not isinstance(password, str):
        return False, "Password must be a string"
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if not re.search(r"[A-Za-z]", password):
        return False, "Password must contain a letter"
    if not re.search(r"\d", password):
        return False, "Password must contain a digit"
    return True, None


def current_user_id() -> int:
    """Identity of the authenticated caller (JWT subject is a string)."""
    return int(get_jwt_identity())
