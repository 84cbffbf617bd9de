"""Input validation helpers shared by the routes, stores and engines.

All helpers return the cleaned value or raise InvalidArgument.
"""

import math
from datetime import date
from numbers import Real

from breathewatch.errors import InvalidArgument
from breathewatch.models.report import ReportStatus, ReportType, Severity, SourceType

MIN_YEAR = 2000
MIN_LOCATION_LENGTH = 2
MIN_DESCRIPTION_LENGTH = 10
MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 8
MIN_AGE = 18
MAX_AGE = 120
MAX_PROFILE_DESCRIPTION_LENGTH = 500
PASSWORD_SPECIALS = frozenset("!@#$%^&*()_+={}[]|\\:;\"'<>,.?/~`-")


def check_string(value: object, name: str) -> str:
    """Require a non-empty string; returns it trimmed."""
    if value is None:
        raise InvalidArgument(f"{name} must be supplied.")
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string.")
    value = value.strip()
    if not value:
        raise InvalidArgument(f"{name} cannot be an empty string or just spaces.")
    return value


def check_number(value: object, name: str) -> float:
    """Require a finite, non-negative real number. Bools and strings are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{name} must be a number.")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidArgument(f"{name} must be a finite number.")
    if number < 0:
        raise InvalidArgument(f"{name} cannot be negative.")
    return number


def validate_location(value: object, name: str = "Location") -> str:
    value = check_string(value, name)
    if len(value) < MIN_LOCATION_LENGTH:
        raise InvalidArgument(f"{name} must be at least {MIN_LOCATION_LENGTH} characters long.")
    return value


def validate_year(value: object) -> int:
    if isinstance(value, bool):
        raise InvalidArgument("Year must be an integer.")
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise InvalidArgument("Year must be an integer.")
        value = int(value)
    if not isinstance(value, int):
        raise InvalidArgument("Year must be an integer.")
    current = date.today().year
    if value < MIN_YEAR or value > current:
        raise InvalidArgument(f"Year must be between {MIN_YEAR} and {current}.")
    return value


def validate_description(value: object) -> str:
    value = check_string(value, "Description")
    if len(value) < MIN_DESCRIPTION_LENGTH:
        raise InvalidArgument(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long."
        )
    return value


def validate_report_type(value: object) -> ReportType:
    try:
        return ReportType(value)
    except ValueError:
        raise InvalidArgument("Invalid report type. Must be: Smoke, Odor, Dust, or Other.") from None


def validate_severity(value: object) -> Severity:
    try:
        return Severity(value)
    except ValueError:
        raise InvalidArgument("Invalid severity level. Must be: Low, Medium, or High.") from None


def validate_status(value: object) -> ReportStatus:
    try:
        return ReportStatus(value)
    except ValueError:
        raise InvalidArgument("Invalid status. Must be: Open, Reviewed, or Resolved.") from None


def validate_source_type(value: object) -> SourceType:
    try:
        return SourceType(value)
    except ValueError:
        raise InvalidArgument(
            "Invalid source type. Must be: Traffic, Industrial, Construction, Residential, or Other."
        ) from None


def validate_contribution(value: object) -> float:
    """Percentage in 0-100. Numeric strings from query parameters are accepted."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise InvalidArgument("Invalid minimum contribution percentage.") from None
    try:
        number = check_number(value, "Contribution")
    except InvalidArgument:
        raise InvalidArgument("Invalid minimum contribution percentage.") from None
    if number > 100:
        raise InvalidArgument("Invalid minimum contribution percentage.")
    return number


def validate_username(value: object) -> str:
    """Usernames are case-insensitive and stored lower-cased."""
    value = check_string(value, "Username")
    if len(value) < MIN_USERNAME_LENGTH:
        raise InvalidArgument(f"Username must be at least {MIN_USERNAME_LENGTH} characters long.")
    if any(c.isspace() for c in value):
        raise InvalidArgument("Username cannot contain spaces.")
    return value.lower()


def validate_password(value: object) -> str:
    """Require 8+ characters with a lowercase, an uppercase, a digit and a special character.

    The password is returned as given, without trimming.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument("Password must be a non-empty string.")
    if (
        len(value) < MIN_PASSWORD_LENGTH
        or not any(c.islower() for c in value)
        or not any(c.isupper() for c in value)
        or not any(c.isdigit() for c in value)
        or not any(c in PASSWORD_SPECIALS for c in value)
    ):
        raise InvalidArgument(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long and contain at least "
            "one lowercase letter, one uppercase letter, one number, and one special character."
        )
    return value


def validate_age(value: object) -> int:
    if value is None or value == "":
        raise InvalidArgument("Age must be provided.")
    if isinstance(value, bool):
        raise InvalidArgument("Age must be a whole number.")
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise InvalidArgument("Age must be a whole number.")
        value = int(value)
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidArgument("Age must be a whole number.")
        value = int(value)
    elif not isinstance(value, int):
        raise InvalidArgument("Age must be a whole number.")
    if value < MIN_AGE or value > MAX_AGE:
        raise InvalidArgument(f"Age must be between {MIN_AGE} and {MAX_AGE}.")
    return value


def validate_profile_description(value: object) -> str:
    """Optional free text; None becomes an empty string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidArgument("Profile description must be a string.")
    value = value.strip()
    if len(value) > MAX_PROFILE_DESCRIPTION_LENGTH:
        raise InvalidArgument(
            f"Profile description must be {MAX_PROFILE_DESCRIPTION_LENGTH} characters or less."
        )
    return value


def title_case(value: str) -> str:
    """'upper west side' -> 'Upper West Side'. Hyphenated parts are capitalized too."""
    words = check_string(value, "Name").split()
    return " ".join(
        "-".join(part[:1].upper() + part[1:].lower() for part in word.split("-"))
        for word in words
    )
