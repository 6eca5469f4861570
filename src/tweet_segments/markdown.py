"""Render text segments as markdown or plain text.

Entities become links: hashtags and cashtags to a search, mentions to the
profile, URLs to their expanded target with the display URL as link text.
"""

import re
from collections.abc import Iterable
from urllib.parse import quote

from .models import ExtendedTweetInfo, SegmentType, TextSegment, UrlEntity

DEFAULT_LINK_BASE = "https://x.com"

_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_\[\]])")


def escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def segment_link(segment: TextSegment, link_base: str = DEFAULT_LINK_BASE) -> str | None:
    """Return the link target for an entity segment, None for plain text."""
    entity = segment.entity
    if segment.type is SegmentType.HASHTAG:
        return f"{link_base}/hashtag/{quote(entity.text)}"
    if segment.type is SegmentType.CASHTAG:
        return f"{link_base}/search?q={quote('$' + entity.text, safe='')}"
    if segment.type is SegmentType.USER_MENTION:
        return f"{link_base}/{entity.screen_name}"
    if segment.type is SegmentType.URL:
        return entity.expanded_url or entity.url
    return None


def render_segments_markdown(
    segments: Iterable[TextSegment], link_base: str = DEFAULT_LINK_BASE
) -> str:
    parts: list[str] = []
    for segment in segments:
        link = segment_link(segment, link_base)
        if link is None:
            parts.append(escape_markdown(segment.text))
        else:
            parts.append(f"[{escape_markdown(segment.text)}]({link})")
    return "".join(parts)


def render_segments_text(segments: Iterable[TextSegment]) -> str:
    """Concatenate the decoded text of all segments."""
    return "".join(segment.text for segment in segments)


def _url_link(entity: UrlEntity) -> str:
    label = entity.display_url or entity.url
    return f"[{escape_markdown(label)}]({entity.expanded_url or entity.url})"


def render_extended_markdown(
    info: ExtendedTweetInfo, link_base: str = DEFAULT_LINK_BASE
) -> str:
    """Render an extended-mode post: reply line, quoted body, attachments."""
    lines: list[str] = []

    if info.hidden_prefix:
        mentions = " ".join(
            f"[@{escape_markdown(m.screen_name)}]({link_base}/{m.screen_name})"
            for m in info.hidden_prefix
        )
        lines.append(f"*Replying to {mentions}*")
        lines.append("")

    body = render_segments_markdown(info.tweet_text, link_base)
    if body.strip():
        for text_line in body.strip().split("\n"):
            lines.append(f"> {text_line}")
        lines.append("")

    if info.hidden_suffix:
        links = ", ".join(_url_link(u) for u in info.hidden_suffix)
        lines.append(f"- **Attachments:** {links}")

    return "\n".join(lines).rstrip("\n") + "\n"
