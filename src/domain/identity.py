"""
Identity derivation - Stable registration ids from email addresses.

Used by the key-value store so the record key can be computed without a
prior round trip. HMAC keeps ids unguessable for anyone without the secret.
"""

import hashlib
import hmac

from .exceptions import IdentitySecretMissing


def email_to_id(email: str, secret: str) -> str:
    """
    Derive the registration id for a normalized email.

    Args:
        email: Normalized email address
        secret: HMAC key (EMAIL_TO_ID_SECRET)

    Returns:
        40-character lowercase hex digest

    Raises:
        IdentitySecretMissing: If secret is empty
    """
    if not secret:
        raise IdentitySecretMissing("EMAIL_TO_ID_SECRET is missing")
    return hmac.new(secret.encode(), email.encode(), hashlib.sha1).hexdigest()
