"""
Shared-secret MAC derivation.

The homeserver verifies ``HMAC-SHA1(registration_shared_secret, username)``
for ``org.matrix.login.shared_secret`` registrations, so the digest here is
fixed by that verifier and must not be upgraded independently.
"""

from __future__ import annotations

import hashlib
import hmac


def authenticate(username: str, secret: bytes | str) -> str:
    """
    Compute the registration MAC for ``username``.

    :param username: Username whose registration is being authorized.
    :type username: str
    :param secret: Shared secret; ``str`` values are UTF-8 encoded.
    :type secret: bytes | str
    :returns: Lowercase hex digest, no separators.
    :rtype: str
    """
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return hmac.new(key, username.encode("utf-8"), hashlib.sha1).hexdigest()
