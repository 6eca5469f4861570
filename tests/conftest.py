"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from tweet_segments.models import (
    CashtagEntity,
    Entities,
    HashtagEntity,
    MediaEntity,
    UrlEntity,
    UserMentionEntity,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def non_bmp_status() -> dict:
    """Status with a non-BMP character, a hashtag, a mention and a photo."""
    return load_fixture("status_non_bmp.json")


@pytest.fixture
def char_reference_status() -> dict:
    """Status whose plain text carries escaped character references."""
    return load_fixture("status_char_reference.json")


@pytest.fixture
def reply_attachment_status() -> dict:
    """Reply with only a photo: the display range is empty."""
    return load_fixture("status_reply_attachment.json")


@pytest.fixture
def graphql_tweet_result() -> dict:
    """GraphQL tweet result wrapped in TweetWithVisibilityResults."""
    return load_fixture("graphql_tweet_result.json")


@pytest.fixture
def mixed_text() -> str:
    return "@alice hi #py $AAPL https://t.co/x1 done"


@pytest.fixture
def mixed_entities() -> Entities:
    """Entities for ``mixed_text``. The URL is double-listed as media."""
    return Entities(
        hashtags=[HashtagEntity(text="py", indices=(10, 13))],
        symbols=[CashtagEntity(text="AAPL", indices=(14, 19))],
        urls=[
            UrlEntity(
                url="https://t.co/x1",
                indices=(20, 35),
                display_url="example.com",
                expanded_url="https://example.com/",
            )
        ],
        user_mentions=[UserMentionEntity(screen_name="alice", indices=(0, 6))],
        media=[
            MediaEntity(
                url="https://t.co/x1",
                indices=(20, 35),
                display_url="pic.x.com/x1",
                expanded_url="https://x.com/a/status/1/photo/1",
            )
        ],
    )
