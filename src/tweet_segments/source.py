"""Parse the ``source`` field of a status.

The field is either a bare client name ("web") or an anchor of the form
``<a href="URL" rel="nofollow">NAME</a>``.
"""

import re

from .htmldecode import html_decode
from .models import Source, Status

_ANCHOR_RE = re.compile(r'<a href="(.+)" rel="nofollow">(.+)</a>')


def parse_source(html: str) -> Source:
    """Resolve a source string into a client name and optional link.

    Markup that does not match the anchor shape is returned as the name.
    """
    if not html.startswith("<"):
        return Source(name=html)

    match = _ANCHOR_RE.fullmatch(html)
    if not match:
        return Source(name=html)

    return Source(
        name=html_decode(match.group(2)),
        href=html_decode(match.group(1)),
    )


def parse_status_source(status: Status) -> Source:
    return parse_source(status.source)
