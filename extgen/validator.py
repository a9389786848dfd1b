"""Extension identifier validation.

The identifier becomes the ``name`` in ``package.json`` and the output
directory name, so it is restricted to letters, digits and hyphens and must
not start with a hyphen.
"""

from __future__ import annotations

import re

_EXTENSION_ID_RE = re.compile(r"[a-z0-9][a-z0-9\-]*", re.IGNORECASE)


def validate_extension_id(value: str | None) -> bool | str:
    """Return ``True`` for a valid identifier, otherwise the error message.

    The ``True``-or-message contract is what questionary expects from a
    ``validate`` callback.
    """
    if not value:
        return "Missing or invalid extension identifier"
    if not _EXTENSION_ID_RE.fullmatch(value):
        return "Invalid extension identifier"
    return True


def is_valid_extension_id(value: str | None) -> bool:
    return validate_extension_id(value) is True
