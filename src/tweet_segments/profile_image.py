"""Profile image URL variants.

Profile image URLs end in ``<name>_normal.<ext>``. Other sizes are served
by swapping the ``_normal`` suffix: ``_mini``, ``_bigger``, ``_400x400``,
or no suffix at all for the original upload.
"""

from urllib.parse import urlsplit

from .models import User

NORMAL_MARKER = "_normal"


def profile_image_size_suffix(size: str | None) -> str:
    """Return the path suffix for a size ("orig" or empty means no suffix)."""
    if not size or size == "orig":
        return ""
    return "_" + size


def alternative_profile_image_url(url: str, size: str | None) -> str:
    """Return ``url`` rewritten to point at the given size.

    Only the ``_normal`` marker in the path is replaced; every other
    character of ``url`` is kept as is, percent-escapes and empty query or
    fragment delimiters included. URLs without ``_normal`` in the path
    come back unchanged.
    """
    parts = urlsplit(url)
    index = parts.path.rfind(NORMAL_MARKER)
    if index < 0:
        return url

    # urlsplit only locates the path; the splice happens on the original string
    head = len(parts.scheme) + 1 if parts.scheme else 0
    if parts.netloc:
        head = url.index(parts.netloc, head) + len(parts.netloc)
    start = url.index(parts.path, head) + index
    return (
        url[:start]
        + profile_image_size_suffix(size)
        + url[start + len(NORMAL_MARKER) :]
    )


def profile_image_url(user: User, size: str | None = "normal") -> str:
    return alternative_profile_image_url(user.profile_image_url, size)


def profile_image_url_https(user: User, size: str | None = "normal") -> str:
    return alternative_profile_image_url(user.profile_image_url_https, size)
