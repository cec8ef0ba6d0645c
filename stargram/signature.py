"""HMAC-SHA256 verification for GitHub webhook deliveries.

GitHub signs each delivery with the shared secret and sends the result in
``X-Hub-Signature-256`` as ``sha256=<hex digest>``. The prefix is part of the
compared value.
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def sign(raw_body: bytes, secret: bytes) -> str:
    """Return the ``X-Hub-Signature-256`` value GitHub would send for a body.

    Examples
    --------
    >>> sign(b"{}", b"secret")[:7]
    'sha256='

    """
    mac = hmac.new(secret, raw_body, hashlib.sha256)
    return f"{SIGNATURE_PREFIX}{mac.hexdigest()}"


def verify(raw_body: bytes, signature_header: str | None, secret: bytes) -> bool:
    """Check ``signature_header`` against the HMAC of ``raw_body``.

    Parameters
    ----------
    raw_body
        Request body exactly as received.
    signature_header
        Value of ``X-Hub-Signature-256``, or ``None`` when absent.
    secret
        Shared webhook secret.

    Returns
    -------
    bool
        ``True`` only when the header matches the expected digest.

    Notes
    -----
    Lengths are compared first because length is not secret;
    ``hmac.compare_digest`` then runs over equal-length byte strings so the
    cost does not depend on where the first difference occurs.

    """
    if not signature_header:
        return False

    try:
        provided = signature_header.encode("utf-8")
    except UnicodeEncodeError:
        return False

    expected = sign(raw_body, secret).encode("utf-8")
    if len(expected) != len(provided):
        return False
    return hmac.compare_digest(expected, provided)


__all__ = ["SIGNATURE_HEADER", "SIGNATURE_PREFIX", "sign", "verify"]
