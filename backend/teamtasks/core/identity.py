"""
User identity normalization.

Membership rows are keyed by the string this module produces, so the claim
order in USER_ID_CLAIMS must be the only order used anywhere a user id is
derived from identity claims.
"""

from typing import Any, Mapping, Optional

from teamtasks.core.constants import USER_ID_CLAIMS
from teamtasks.core.exceptions import AuthorizationError


def normalize_user_id(claims: Optional[Mapping[str, Any]]) -> str:
    """
    Derive the stable user id from an identity claims bag.

    Args:
        claims: Claims from the identity provider (any subset of keys)

    Returns:
        The first present, non-empty claim from USER_ID_CLAIMS, trimmed

    Raises:
        AuthorizationError: If no usable identifier exists
    """
    if not claims:
        raise AuthorizationError("Authentication required - missing user identity")

    for claim in USER_ID_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str) and value.strip():
            return value.strip()

    raise AuthorizationError("Unable to determine user identity")

