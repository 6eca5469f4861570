"""Data models for posts, entities and rendered text segments.

Entity offsets follow the provider's indices convention: ``[start, end)``
measured in code points of the text the entity belongs to.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class HashtagEntity:
    text: str  # tag without the leading '#'
    indices: tuple[int, int]

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def end(self) -> int:
        return self.indices[1]


@dataclass
class CashtagEntity:
    text: str  # symbol without the leading '$'
    indices: tuple[int, int]

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def end(self) -> int:
        return self.indices[1]


@dataclass
class UrlEntity:
    url: str  # t.co link as it appears in the text
    indices: tuple[int, int]
    display_url: str = ""
    expanded_url: str = ""

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def end(self) -> int:
        return self.indices[1]


@dataclass
class MediaEntity(UrlEntity):
    id: str = ""
    type: str = "photo"  # "photo", "video", "animated_gif"
    media_url_https: str = ""


@dataclass
class UserMentionEntity:
    screen_name: str
    indices: tuple[int, int]
    name: str = ""
    id: str = ""

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def end(self) -> int:
        return self.indices[1]


Entity = HashtagEntity | CashtagEntity | UrlEntity | UserMentionEntity


@dataclass
class Entities:
    hashtags: list[HashtagEntity] = field(default_factory=list)
    symbols: list[CashtagEntity] = field(default_factory=list)
    urls: list[UrlEntity] = field(default_factory=list)
    user_mentions: list[UserMentionEntity] = field(default_factory=list)
    media: list[MediaEntity] = field(default_factory=list)


@dataclass
class User:
    id: str
    screen_name: str  # handle without @
    name: str  # display name
    description: str = ""
    description_entities: Entities | None = None
    profile_image_url: str = ""
    profile_image_url_https: str = ""


@dataclass
class ExtendedTweet:
    """The ``extended_tweet`` payload sent for long posts in compatibility mode."""

    full_text: str
    entities: Entities | None = None
    display_text_range: tuple[int, int] | None = None


@dataclass
class Status:
    id: str
    text: str | None = None
    full_text: str | None = None
    entities: Entities | None = None
    display_text_range: tuple[int, int] | None = None
    extended_tweet: ExtendedTweet | None = None
    source: str = ""
    user: User | None = None
    quoted_status_id: str | None = None


@dataclass
class DirectMessage:
    id: str
    text: str
    entities: Entities | None = None
    sender_id: str = ""


@dataclass(frozen=True)
class Source:
    """Resolved ``source`` field: the client a post was made with."""

    name: str
    href: str | None = None


class SegmentType(Enum):
    PLAIN = "plain"
    HASHTAG = "hashtag"
    CASHTAG = "cashtag"
    URL = "url"
    USER_MENTION = "user_mention"


@dataclass(frozen=True)
class TextSegment:
    """A contiguous span of post text.

    ``raw_text`` is the span exactly as it appears in the source text.
    ``text`` is what should be shown: HTML-decoded for plain spans, the
    display token for entities (e.g. ``display_url`` for links).
    ``entity`` is None for plain spans.
    """

    type: SegmentType
    raw_text: str
    text: str
    start: int
    end: int
    entity: Entity | None = None


@dataclass(frozen=True)
class ExtendedTweetInfo:
    """A post rendered in extended (display range) mode."""

    tweet_text: tuple[TextSegment, ...]
    hidden_prefix: tuple[UserMentionEntity, ...] = ()  # replied-to users
    hidden_suffix: tuple[UrlEntity, ...] = ()  # attachment links
