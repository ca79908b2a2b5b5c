"""HTTP Basic client credential extraction."""

import base64
import binascii

from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param


def extract_basic_credentials(
    authorization: str | None,
) -> HTTPBasicCredentials | None:
    """Parse a Basic Authorization header value into client credentials.

    Unlike `fastapi.security.HTTPBasic`, a garbled header is reported as
    `None` instead of raising, so callers can treat it like a missing header.
    """
    scheme, param = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "basic" or not param:
        return None
    try:
        data = base64.b64decode(param, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error):
        return None
    username, separator, password = data.partition(":")
    if not separator:
        return None
    return HTTPBasicCredentials(username=username, password=password)
