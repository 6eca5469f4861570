"""Parse post-provider JSON into model objects.

Two shapes are accepted:

- REST (v1.1) status objects: ``text``/``full_text``, ``entities``,
  ``display_text_range`` and, in compatibility mode, ``extended_tweet``.
- GraphQL tweet results, where the same status object sits under
  ``legacy`` and the author under ``core.user_results.result``. A result
  may be wrapped in a TweetWithVisibilityResults container.
"""

import logging

from .models import (
    CashtagEntity,
    DirectMessage,
    Entities,
    ExtendedTweet,
    HashtagEntity,
    MediaEntity,
    Status,
    UrlEntity,
    User,
    UserMentionEntity,
)

logger = logging.getLogger(__name__)


def _indices(raw: dict) -> tuple[int, int]:
    start, end = raw["indices"]
    return int(start), int(end)


def _range(raw: list | None) -> tuple[int, int] | None:
    if raw is None:
        return None
    start, end = raw
    return int(start), int(end)


def _url_entity(raw: dict) -> UrlEntity:
    return UrlEntity(
        url=raw.get("url", ""),
        indices=_indices(raw),
        display_url=raw.get("display_url", ""),
        expanded_url=raw.get("expanded_url", ""),
    )


def _media_entity(raw: dict) -> MediaEntity:
    return MediaEntity(
        url=raw.get("url", ""),
        indices=_indices(raw),
        display_url=raw.get("display_url", ""),
        expanded_url=raw.get("expanded_url", ""),
        id=str(raw.get("id_str") or raw.get("id", "")),
        type=raw.get("type", "photo"),
        media_url_https=raw.get("media_url_https", ""),
    )


def parse_entities(raw: dict | None) -> Entities | None:
    """Parse an ``entities`` object. Missing lists become empty lists."""
    if raw is None:
        return None

    return Entities(
        hashtags=[
            HashtagEntity(text=h["text"], indices=_indices(h))
            for h in raw.get("hashtags") or []
        ],
        symbols=[
            CashtagEntity(text=s["text"], indices=_indices(s))
            for s in raw.get("symbols") or []
        ],
        urls=[_url_entity(u) for u in raw.get("urls") or []],
        user_mentions=[
            UserMentionEntity(
                screen_name=m["screen_name"],
                indices=_indices(m),
                name=m.get("name", ""),
                id=str(m.get("id_str") or m.get("id", "")),
            )
            for m in raw.get("user_mentions") or []
        ],
        media=[_media_entity(m) for m in raw.get("media") or []],
    )


def parse_user(raw: dict) -> User:
    """Parse a REST user object (or the ``legacy`` part of a GraphQL user)."""
    user_entities = raw.get("entities") or {}
    description_urls = (user_entities.get("description") or {}).get("urls")
    description_entities = None
    if description_urls:
        description_entities = Entities(
            urls=[_url_entity(u) for u in description_urls]
        )

    return User(
        id=str(raw.get("id_str") or raw.get("id", "")),
        screen_name=raw["screen_name"],
        name=raw.get("name", ""),
        description=raw.get("description") or "",
        description_entities=description_entities,
        profile_image_url=raw.get("profile_image_url", ""),
        profile_image_url_https=raw.get("profile_image_url_https", ""),
    )


def parse_status(raw: dict) -> Status:
    """Parse a REST status object.

    Raises:
        ValueError: the object has neither ``text`` nor ``full_text``, or an
            entity is malformed.
    """
    if raw.get("text") is None and raw.get("full_text") is None:
        raise ValueError("status has neither text nor full_text")

    try:
        extended_tweet = None
        extended_raw = raw.get("extended_tweet")
        if extended_raw:
            extended_tweet = ExtendedTweet(
                full_text=extended_raw["full_text"],
                entities=parse_entities(extended_raw.get("entities")),
                display_text_range=_range(extended_raw.get("display_text_range")),
            )

        user_raw = raw.get("user")
        return Status(
            id=str(raw.get("id_str") or raw.get("id", "")),
            text=raw.get("text"),
            full_text=raw.get("full_text"),
            entities=parse_entities(raw.get("entities")),
            display_text_range=_range(raw.get("display_text_range")),
            extended_tweet=extended_tweet,
            source=raw.get("source", ""),
            user=parse_user(user_raw) if user_raw else None,
            quoted_status_id=raw.get("quoted_status_id_str"),
        )
    except (AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"malformed status: {e!r}") from e


def _extract_graphql_user(tweet_result: dict) -> dict | None:
    """Find the user object of a GraphQL tweet result.

    The user sits under ``core.user_results.result`` (sometimes the singular
    ``user_result``), either with a ``legacy`` wrapper or flattened.
    """
    core = tweet_result.get("core", {})
    for key in ("user_results", "user_result"):
        result = core.get(key, {}).get("result", {})
        if not result:
            continue
        legacy = result.get("legacy", {})
        if legacy.get("screen_name"):
            return {"id_str": result.get("rest_id", ""), **legacy}
        if result.get("screen_name"):
            return {"id_str": result.get("rest_id", ""), **result}
    return None


def parse_tweet_result(tweet_result: dict) -> Status | None:
    """Parse a GraphQL tweet result. Returns None for tombstones."""
    if tweet_result.get("__typename") == "TweetWithVisibilityResults":
        tweet_result = tweet_result.get("tweet", {})

    if not tweet_result or tweet_result.get("__typename") == "TweetTombstone":
        return None

    legacy = dict(tweet_result.get("legacy", {}))
    legacy.setdefault("id_str", tweet_result.get("rest_id", ""))
    if "source" in tweet_result:
        legacy.setdefault("source", tweet_result["source"])

    user = _extract_graphql_user(tweet_result)
    if user is not None:
        legacy["user"] = user
    else:
        logger.debug("tweet %s: no user object found", legacy["id_str"])

    return parse_status(legacy)


def parse_document(raw: dict) -> Status | None:
    """Parse either JSON shape, telling them apart by the ``legacy`` key."""
    if "legacy" in raw or "__typename" in raw:
        return parse_tweet_result(raw)
    return parse_status(raw)


def parse_statuses(raw_items: list[dict]) -> list[Status]:
    """Parse a list of statuses, skipping malformed items."""
    statuses = []
    for raw in raw_items:
        try:
            status = parse_document(raw)
            if status:
                statuses.append(status)
        except ValueError as e:
            item_id = raw.get("id_str") or raw.get("rest_id", "?")
            logger.warning("Skipping malformed status %s: %s", item_id, e)
    return statuses


def parse_direct_message(raw: dict) -> DirectMessage:
    """Parse a direct message.

    Accepts a ``message_create`` event as well as the older flat object
    with ``text``/``entities`` at the top level.
    """
    message_create = raw.get("message_create")
    try:
        if message_create is not None:
            data = message_create["message_data"]
            return DirectMessage(
                id=str(raw.get("id", "")),
                text=data["text"],
                entities=parse_entities(data.get("entities")),
                sender_id=str(message_create.get("sender_id", "")),
            )
        return DirectMessage(
            id=str(raw.get("id_str") or raw.get("id", "")),
            text=raw["text"],
            entities=parse_entities(raw.get("entities")),
            sender_id=str(raw.get("sender_id_str") or raw.get("sender_id", "")),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed direct message: {e!r}") from e
