"""Email Validation — pure syntax predicate for record identities.

Invariants:
    - is_email_valid never raises and never touches the network
    - Empty strings are invalid

Design Decisions:
    - email-validator over a hand-written regex: RFC-aware local/domain parts,
      the same library pydantic's EmailStr relies on
    - check_deliverability=False: no DNS lookups on the request path
"""

from email_validator import EmailNotValidError, validate_email


def is_email_valid(email: str) -> bool:
    """Return True if email is a syntactically valid address."""
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
