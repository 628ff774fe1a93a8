"""
Password hashing for the account store.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>`` with a
random per-account salt, so the work factor can change without invalidating
existing accounts.
"""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 260_000
SALT_BYTES = 16


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("ascii"),
        iterations,
    ).hex()


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """
    Hashes a password with a fresh salt.

    Args:
        password (str): The plain password.
        iterations (int): PBKDF2 work factor.

    Returns:
        str: The encoded hash.

    """
    salt = secrets.token_hex(SALT_BYTES)
    return f"{ALGORITHM}${iterations}${salt}${_derive(password, salt, iterations)}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Checks a password against an encoded hash.

    Malformed hashes never match.

    Args:
        password (str): The plain password.
        encoded (str): The value produced by hash_password.

    Returns:
        bool: True when the password matches.

    """
    try:
        algorithm, iterations, salt, digest = encoded.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != ALGORITHM or rounds < 1:
        return False
    return hmac.compare_digest(_derive(password, salt, rounds), digest)
