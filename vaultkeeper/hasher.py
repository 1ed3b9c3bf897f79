"""Password hashing for stored user credentials."""

from __future__ import annotations

import nacl.exceptions
import nacl.pwhash


def make_hash(password: str) -> str:
    """Hash ``password`` into a self-describing argon2id string."""
    hashed = nacl.pwhash.argon2id.str(
        password.encode(),
        opslimit=nacl.pwhash.argon2id.OPSLIMIT_INTERACTIVE,
        memlimit=nacl.pwhash.argon2id.MEMLIMIT_INTERACTIVE,
    )
    return hashed.decode("ascii")


def verify_password(hashed: str, password: str) -> bool:
    """True when ``password`` matches the stored ``hashed`` string."""
    try:
        return bool(nacl.pwhash.verify(hashed.encode(), password.encode()))
    except (nacl.exceptions.CryptoError, ValueError):
        return False