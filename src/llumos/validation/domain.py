"""Domain validation for website fields in marketing-site forms.

Catches the common junk people type into a "your website" box (emails,
placeholders, street addresses, bare names) and normalizes the rest to a
bare lower-case domain. Unusual but plausible domains are accepted with a
warning rather than rejected.
"""

from __future__ import annotations

import re

from llumos.models import DomainErrorType, DomainValidationResult

INVALID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^test$", re.IGNORECASE),
    re.compile(r"^example$", re.IGNORECASE),
    re.compile(r"^demo$", re.IGNORECASE),
    re.compile(r"^sample$", re.IGNORECASE),
    re.compile(r"^asdf", re.IGNORECASE),
    re.compile(r"^qwerty", re.IGNORECASE),
    re.compile(r"^123"),
    re.compile(r"^abc$", re.IGNORECASE),
    re.compile(r"^xxx", re.IGNORECASE),
    re.compile(r"^no\s*website", re.IGNORECASE),
    re.compile(r"^n/a$", re.IGNORECASE),
    re.compile(r"^none$", re.IGNORECASE),
    re.compile(r"^null$", re.IGNORECASE),
    re.compile(r"^undefined$", re.IGNORECASE),
    # Street addresses
    re.compile(r"calle\s+\d", re.IGNORECASE),
    re.compile(r"^\d+\s+\w+\s+(st|street|ave|avenue|rd|road|blvd)", re.IGNORECASE),
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DOMAIN_PATTERN = re.compile(r"[a-z0-9]+([-.][a-z0-9]+)*\.[a-z]{2,}")

COMMON_TLDS = frozenset({
    "com", "org", "net", "io", "co", "ai", "app", "dev", "me", "info", "biz",
    "edu", "gov", "uk", "de", "fr", "es", "it", "nl", "au", "ca", "jp", "cn",
    "in", "br", "mx", "ru", "us", "tech", "online", "store", "shop", "site",
    "xyz", "club", "blog", "agency", "digital", "media", "marketing", "solutions",
})

MIN_DOMAIN_LENGTH = 4


def clean_domain(value: str) -> str:
    """Strip protocol, ``www.``, path, query and fragment; lower-case."""
    cleaned = value.strip().lower()
    if cleaned.startswith(("http://", "https://")):
        cleaned = re.sub(r"^https?://(www\.)?", "", cleaned)
    else:
        cleaned = re.sub(r"^(www\.)?", "", cleaned)
    return re.sub(r"[/?#].*$", "", cleaned)


def validate_domain(value: str | None) -> DomainValidationResult:
    """Validate and clean a website domain entered by a user."""
    if not value or not value.strip():
        return DomainValidationResult(
            is_valid=False,
            cleaned_domain="",
            warning="Please enter a website URL",
            error_type=DomainErrorType.TOO_SHORT,
        )

    cleaned = clean_domain(value)

    if EMAIL_PATTERN.match(value.strip()):
        return DomainValidationResult(
            is_valid=False,
            cleaned_domain=cleaned,
            warning=(
                "This looks like an email address. Please enter your website "
                "domain (e.g., yourcompany.com)"
            ),
            error_type=DomainErrorType.EMAIL,
        )

    if any(pattern.search(cleaned) for pattern in INVALID_PATTERNS):
        return DomainValidationResult(
            is_valid=False,
            cleaned_domain=cleaned,
            warning="Please enter a valid business website URL",
            error_type=DomainErrorType.INVALID_PATTERN,
        )

    if len(cleaned) < MIN_DOMAIN_LENGTH:
        return DomainValidationResult(
            is_valid=False,
            cleaned_domain=cleaned,
            warning=(
                "Domain name is too short. Please enter a complete URL "
                "(e.g., yourcompany.com)"
            ),
            error_type=DomainErrorType.TOO_SHORT,
        )

    if "." not in cleaned:
        return DomainValidationResult(
            is_valid=False,
            cleaned_domain=cleaned,
            warning=f'Did you mean "{cleaned}.com"? Please include the domain extension.',
            error_type=DomainErrorType.NO_TLD,
        )

    if not DOMAIN_PATTERN.fullmatch(cleaned):
        # Allowed, but flagged
        return DomainValidationResult(
            is_valid=True,
            cleaned_domain=cleaned,
            warning="This domain format looks unusual. Results may be inaccurate.",
            error_type=DomainErrorType.GIBBERISH,
        )

    if cleaned.rsplit(".", 1)[-1] not in COMMON_TLDS:
        return DomainValidationResult(
            is_valid=True,
            cleaned_domain=cleaned,
            warning="Uncommon domain extension detected. Results may vary.",
        )

    return DomainValidationResult(is_valid=True, cleaned_domain=cleaned)
