"""Repository identifier parsing.

Turns free-form user input such as ``https://github.com/facebook/react.git``
into a :class:`~repomirror.models.RepositoryRef`. Anything after the
``<owner>/<name>`` pair (``/tree/main``, further path segments) is ignored.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import RepositoryRef

_GITHUB_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")
_GIT_SUFFIX = ".git"


def parse_repository_url(url: str) -> Optional[RepositoryRef]:
    """Extract owner and name from the first ``github.com/<owner>/<name>``.

    Returns ``None`` when the input holds no such pair. A trailing ``.git``
    is stripped from the name; a name that is nothing but ``.git`` counts
    as no match.
    """
    match = _GITHUB_PATTERN.search(url)
    if match is None:
        return None

    owner, name = match.group(1), match.group(2)
    if name.endswith(_GIT_SUFFIX):
        name = name[: -len(_GIT_SUFFIX)]
    if not name:
        return None
    return RepositoryRef(owner=owner, name=name)
