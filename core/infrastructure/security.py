"""
Credential helpers.

Password hashing (PBKDF2-SHA256), signed session tokens and the gateway
signature check. All secrets are compared with hmac.compare_digest.
"""
import base64
import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from typing import Optional


PBKDF2_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 240_000


# =============================================================================
# PASSWORDS
# =============================================================================

def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """
    Hash a password for storage.

    Format: pbkdf2_sha256$<iterations>$<salt>$<hash>

    Args:
        password: Plain text password
        iterations: PBKDF2 work factor

    Returns:
        Encoded hash string
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    encoded = base64.b64encode(digest).decode("ascii")
    return f"{PBKDF2_ALGORITHM}${iterations}${salt}${encoded}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against a hash produced by hash_password()."""
    try:
        algorithm, iterations, salt, expected = encoded.split("$", 3)
    except ValueError:
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    actual = base64.b64encode(digest).decode("ascii")
    return hmac.compare_digest(actual, expected)


def placeholder_password_hash(iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash of a random secret, for guest accounts that never chose a password."""
    return hash_password(secrets.token_urlsafe(32), iterations)


# =============================================================================
# SESSION TOKENS
# =============================================================================

@dataclass(frozen=True)
class SessionClaims:
    account_id: int
    email: str
    expires_at: int


def _sign(secret: str, message: str) -> str:
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def issue_session_token(
    account_id: int,
    email: str,
    secret: str,
    ttl_days: int = 30,
    now: Optional[float] = None,
) -> str:
    """
    Issue a signed session token.

    Args:
        account_id: Account the token authenticates
        email: Account email (part of the signed message)
        secret: Server signing secret
        ttl_days: Lifetime in days
        now: Clock override (epoch seconds)

    Returns:
        "<account_id>:<email>:<expires>:<signature>"
    """
    issued = int(now if now is not None else time.time())
    expires = issued + ttl_days * 86400
    message = f"{account_id}:{email}:{expires}"
    return f"{message}:{_sign(secret, message)}"


def verify_session_token(token: str, secret: str, now: Optional[float] = None) -> Optional[SessionClaims]:
    """
    Validate a session token.

    Returns:
        SessionClaims, or None when the token is malformed, forged or expired
    """
    try:
        message, signature = token.rsplit(":", 1)
        account_id, rest = message.split(":", 1)
        email, expires = rest.rsplit(":", 1)
        claims = SessionClaims(account_id=int(account_id), email=email, expires_at=int(expires))
    except ValueError:
        return None

    if not hmac.compare_digest(signature, _sign(secret, message)):
        return None

    current = int(now if now is not None else time.time())
    if current > claims.expires_at:
        return None

    return claims


# =============================================================================
# GATEWAY SIGNATURES
# =============================================================================

def hmac_sha256_hex(secret: str, payload: str) -> str:
    """Hex HMAC-SHA256 as produced by the payment gateway."""
    return _sign(secret, payload)


def signature_matches(secret: str, payload: str, signature: str) -> bool:
    """Constant-time comparison of a gateway signature."""
    if not secret or not signature:
        return False
    return hmac.compare_digest(hmac_sha256_hex(secret, payload), signature.strip().lower())
