"""
shared/utils/security.py
Password hashing and guest identity helpers.
"""

import hashlib
import secrets
from typing import Optional

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Stored for accounts that cannot log in (seeded professionals, guests)
UNUSABLE_PASSWORD = "!"

GUEST_EMAIL_DOMAIN = "guest.jaruri-chha.com"


# ── Password ──────────────────────────────────────────────────

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not pwd_context.identify(hashed_password):
        return False
    return pwd_context.verify(plain_password, hashed_password)


# ── Guest identity ────────────────────────────────────────────

def guest_handle() -> str:
    """Random, collision-resistant suffix for a synthetic guest account."""
    return secrets.token_hex(8)


def guest_identity_key(email: Optional[str], phone: Optional[str]) -> str:
    """
    Stable key for guest de-duplication: SHA-256 of normalized (email, phone).
    Two requests with the same contact details map to the same guest.
    """
    normalized = f"{(email or '').strip().lower()}|{(phone or '').strip()}"
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def guest_credentials(handle: str) -> dict:
    """Synthetic username/email for a guest. Never collides with real sign-ups."""
    return {
        "username": f"guest_{handle}",
        "email": f"guest_{handle}@{GUEST_EMAIL_DOMAIN}",
    }
