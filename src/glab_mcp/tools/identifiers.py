"""GitLab project identifiers for REST paths."""

import re
from urllib.parse import quote

_NUMERIC_ID = re.compile(r"[0-9]+")

# Characters left unescaped besides letters, digits and "_.-~"
_SEGMENT_SAFE = "!*'()"


def encode_segment(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment or query value."""
    return quote(value, safe=_SEGMENT_SAFE)


def project_id_or_encoded_path(project: str) -> str:
    """
    Normalize a project reference for ``projects/:id`` API paths.

    A purely numeric ID is returned unchanged. A path such as
    ``group/subgroup/project`` is percent-encoded once so it fits in a
    single path segment.
    """
    if _NUMERIC_ID.fullmatch(project):
        return project
    return encode_segment(project)
