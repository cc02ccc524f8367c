"""Request signing for the Remember The Milk API.

The service recomputes the signature on its side and rejects any request
whose ``api_sig`` differs, so key ordering must be independent of the
order in which parameters were added.
"""

import hashlib
from typing import Mapping

SIGNATURE_PARAM = "api_sig"


def sign(shared_secret: str, params: Mapping[str, str]) -> str:
    """Compute the MD5 signature for a parameter set.

    Args:
        shared_secret: Application shared secret.
        params: Request parameters, excluding ``api_sig``.

    Returns:
        Lowercase hexadecimal MD5 digest of the secret followed by every
        key/value pair in ascending key order.
    """
    payload = shared_secret + "".join(
        f"{key}{params[key]}" for key in sorted(params)
    )
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def signed(shared_secret: str, params: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``params`` with ``api_sig`` appended."""
    unsigned = {k: str(v) for k, v in params.items() if k != SIGNATURE_PARAM}
    unsigned[SIGNATURE_PARAM] = sign(shared_secret, unsigned)
    return unsigned
