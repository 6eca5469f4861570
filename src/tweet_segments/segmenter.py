"""Split post text into plain and entity segments.

Entities come as separate lists per type (hashtags, symbols, urls, media,
user_mentions), each indexed independently into the same text. They are
merged, restricted to the requested window and ordered by start offset;
the gaps between them become plain segments, HTML-decoded.

Ties on the start offset keep merge order: hashtags, cashtags, urls and
media, then mentions.
"""

import logging
from collections.abc import Iterator
from operator import attrgetter

from .codepoints import LogicalChar, get_code_points, join_code_points
from .htmldecode import html_decode
from .models import (
    CashtagEntity,
    DirectMessage,
    Entities,
    Entity,
    ExtendedTweetInfo,
    HashtagEntity,
    SegmentType,
    Status,
    TextSegment,
    UrlEntity,
    User,
    UserMentionEntity,
)

logger = logging.getLogger(__name__)


class TextSegments:
    """Lazily produced segments of a text window.

    Iterating again starts over from the first segment, so the same object
    can be rendered more than once.
    """

    def __init__(
        self,
        chars: list[LogicalChar],
        entities: Entities | None,
        start: int,
        end: int,
    ):
        self._chars = chars
        self._entities = entities
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[TextSegment]:
        return _iter_segments(self._chars, self._entities, self.start, self.end)

    def __repr__(self) -> str:
        return f"TextSegments(start={self.start}, end={self.end})"


def enumerate_text_segments(
    text: str,
    entities: Entities | None = None,
    start: int | None = None,
    end: int | None = None,
) -> TextSegments:
    """Segment ``text`` over the code-point window ``[start, end)``.

    The window defaults to the whole text. Only entities starting inside the
    window are used; an entity may run past ``end`` and its segment is
    emitted whole.

    Raises:
        TypeError: text is None.
        ValueError: the window does not fit the text.
    """
    if text is None:
        raise TypeError("text must not be None")

    chars = get_code_points(text)
    count = len(chars)
    if start is None:
        start = 0
    if end is None:
        end = count

    if start < 0 or start > count:
        raise ValueError(
            f"start index {start} out of range for text of {count} code points"
        )
    if end < start or end > count:
        raise ValueError(
            f"end index {end} out of range [{start}, {count}]"
        )

    return TextSegments(chars, entities, start, end)


def _plain_segment(chars: list[LogicalChar], start: int, end: int) -> TextSegment:
    raw = join_code_points(chars, start, end - start)
    return TextSegment(
        type=SegmentType.PLAIN,
        raw_text=raw,
        text=html_decode(raw),
        start=start,
        end=end,
    )


def _entity_segment(entity: Entity) -> TextSegment:
    """Build the segment for an entity from its canonical token."""
    if isinstance(entity, HashtagEntity):
        seg_type, raw, display = SegmentType.HASHTAG, "#" + entity.text, None
    elif isinstance(entity, CashtagEntity):
        seg_type, raw, display = SegmentType.CASHTAG, "$" + entity.text, None
    elif isinstance(entity, UrlEntity):
        seg_type, raw, display = SegmentType.URL, entity.url, entity.display_url
    elif isinstance(entity, UserMentionEntity):
        seg_type, raw, display = (
            SegmentType.USER_MENTION,
            "@" + entity.screen_name,
            None,
        )
    else:
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}")

    return TextSegment(
        type=seg_type,
        raw_text=raw,
        text=display or raw,
        start=entity.start,
        end=entity.end,
        entity=entity,
    )


def merge_url_entities(entities: Entities) -> list[UrlEntity]:
    """URLs followed by the media entities that no URL already covers.

    Direct messages list an attachment both as a URL and as media at the
    same start offset; the URL wins.
    """
    url_starts = {u.start for u in entities.urls}
    return list(entities.urls) + [
        m for m in entities.media if m.start not in url_starts
    ]


def _entity_segments(entities: Entities) -> list[TextSegment]:
    merged: list[Entity] = [
        *entities.hashtags,
        *entities.symbols,
        *merge_url_entities(entities),
        *entities.user_mentions,
    ]
    return [_entity_segment(e) for e in merged]


def _iter_segments(
    chars: list[LogicalChar],
    entities: Entities | None,
    start: int,
    end: int,
) -> Iterator[TextSegment]:
    if start == end:
        return

    if entities is None:
        yield _plain_segment(chars, start, end)
        return

    parts = sorted(
        (p for p in _entity_segments(entities) if start <= p.start < end),
        key=attrgetter("start"),
    )
    if not parts:
        yield _plain_segment(chars, start, end)
        return

    position = start
    for part in parts:
        if part.start > position:
            yield _plain_segment(chars, position, part.start)
        yield part
        position = part.end

    if position < end:
        yield _plain_segment(chars, position, end)


def status_text_segments(status: Status) -> TextSegments:
    """Segment the base text of a status (``full_text`` if ``text`` is absent)."""
    text = status.text if status.text is not None else status.full_text
    return enumerate_text_segments(text, status.entities)


def direct_message_text_segments(dm: DirectMessage) -> TextSegments:
    return enumerate_text_segments(dm.text, dm.entities)


def user_description_segments(user: User) -> TextSegments:
    return enumerate_text_segments(user.description, user.description_entities)


def get_extended_tweet_elements(status: Status) -> ExtendedTweetInfo:
    """Render a status in extended mode.

    With a display range, only the text inside it is segmented. Mentions
    starting before the range become the hidden prefix ("Replying to ...")
    and URLs/media starting at or after its end the hidden suffix
    (attachments). Without a display range the base text is segmented and
    nothing is hidden.
    """
    extended = status.extended_tweet
    display_range = status.display_text_range
    if display_range is None and extended is not None:
        display_range = extended.display_text_range

    if display_range is None:
        return ExtendedTweetInfo(tweet_text=tuple(status_text_segments(status)))

    start, end = display_range

    text = status.full_text
    if text is None and extended is not None:
        text = extended.full_text
    if text is None:
        text = status.text

    entities = extended.entities if extended is not None else None
    if entities is None:
        entities = status.entities

    tweet_text = tuple(enumerate_text_segments(text, entities, start, end))
    if entities is None:
        return ExtendedTweetInfo(tweet_text=tweet_text)

    hidden_prefix = tuple(m for m in entities.user_mentions if m.start < start)
    hidden_suffix = tuple(u for u in merge_url_entities(entities) if u.start >= end)
    logger.debug(
        "status %s: display range [%d, %d), %d hidden mentions, %d hidden links",
        status.id,
        start,
        end,
        len(hidden_prefix),
        len(hidden_suffix),
    )
    return ExtendedTweetInfo(
        tweet_text=tweet_text,
        hidden_prefix=hidden_prefix,
        hidden_suffix=hidden_suffix,
    )
