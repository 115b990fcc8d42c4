"""Unit tests for password hashing, session tokens and gateway signatures."""
import hashlib
import hmac

from core.infrastructure.security import (
    hash_password,
    hmac_sha256_hex,
    issue_session_token,
    placeholder_password_hash,
    signature_matches,
    verify_password,
    verify_session_token,
)


SECRET = "session-secret"


def test_password_round_trip():
    encoded = hash_password("hunter22", iterations=1000)

    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("hunter22", encoded)
    assert not verify_password("hunter23", encoded)


def test_password_hashes_are_salted():
    assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("x", "not-a-hash")
    assert not verify_password("x", "md5$1$salt$digest")


def test_placeholder_hash_is_valid_format():
    assert placeholder_password_hash(iterations=1000).count("$") == 3


def test_session_token_round_trip():
    token = issue_session_token(5, "asha@example.com", SECRET, ttl_days=30, now=1_700_000_000)

    claims = verify_session_token(token, SECRET, now=1_700_000_100)

    assert claims is not None
    assert claims.account_id == 5
    assert claims.email == "asha@example.com"
    assert claims.expires_at == 1_700_000_000 + 30 * 86400


def test_session_token_expires():
    token = issue_session_token(5, "asha@example.com", SECRET, ttl_days=1, now=0)

    assert verify_session_token(token, SECRET, now=86401) is None


def test_session_token_rejects_tampering():
    token = issue_session_token(5, "asha@example.com", SECRET, now=0)
    forged = token.replace("5:", "6:", 1)

    assert verify_session_token(forged, SECRET, now=1) is None
    assert verify_session_token(token, "other-secret", now=1) is None
    assert verify_session_token("garbage", SECRET) is None


def test_gateway_signature_matches_reference_hmac():
    payload = "order_abc|pay_xyz"
    expected = hmac.new(b"key_secret", payload.encode(), hashlib.sha256).hexdigest()

    assert hmac_sha256_hex("key_secret", payload) == expected
    assert signature_matches("key_secret", payload, expected)
    assert signature_matches("key_secret", payload, expected.upper())


def test_gateway_signature_rejects_wrong_payload_or_empty_values():
    signature = hmac_sha256_hex("key_secret", "order_abc|pay_xyz")

    assert not signature_matches("key_secret", "order_abc|pay_other", signature)
    assert not signature_matches("", "order_abc|pay_xyz", signature)
    assert not signature_matches("key_secret", "order_abc|pay_xyz", "")
