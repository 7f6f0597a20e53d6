"""Password hashing utilities."""

from passlib.context import CryptContext

from ..core.exceptions import CredentialStoreError

# Password hashing context
# Use bcrypt_sha256 to avoid bcrypt's 72-byte truncation issue on long passwords
# This pre-hashes with SHA-256 before applying bcrypt.
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Comparison is constant-time. A mismatch returns False; an unreadable
    stored hash raises CredentialStoreError.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as exc:
        raise CredentialStoreError("Stored credential is malformed") from exc


def dummy_verify() -> None:
    """Spend the time of one verification without a real hash.

    Used when the account does not exist so a login for an unknown email
    costs the same as one with a wrong password.
    """
    pwd_context.dummy_verify()

