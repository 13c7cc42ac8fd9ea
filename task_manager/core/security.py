"""
Account password hashing.

bcrypt only reads the first 72 bytes of its input. Registration rejects
longer passwords, so two distinct passwords can never share a hash; here
the limit is enforced rather than silently truncated.
"""

import bcrypt

PASSWORD_MAX_BYTES = 72


def password_fits(password: str) -> bool:
    """True when bcrypt will read the whole password."""
    return len(password.encode("utf-8")) <= PASSWORD_MAX_BYTES


def hash_password(password: str) -> str:
    """
    Hash an account password for storage in User.hashed_password.

    Raises:
        ValueError: password longer than PASSWORD_MAX_BYTES
    """
    if not password_fits(password):
        raise ValueError(f"password exceeds {PASSWORD_MAX_BYTES} bytes")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a login attempt against a stored hash. Over-long input never matches."""
    if not password_fits(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
