"""
Update-kind queries and text patterns.

A query names the shape of update a question (or a cancel rule) is interested in:

- ``"message"``: the update carries a message
- ``"message:text"``: the message carries text
- ``"callback_query:data"``: a callback query with data
- ``":photo"``: any message-like update (message, edited_message, channel_post,
  edited_channel_post) carrying a photo

A ``telegram.ext.filters.BaseFilter`` may be used wherever a string query is accepted.
"""
import re
from typing import Iterable, Optional, Tuple, Union

import telegram
from telegram import Message, Update
from telegram.constants import UpdateType
from telegram.ext.filters import BaseFilter

Query = Union[str, BaseFilter]
Pattern = Union[str, re.Pattern]

UPDATE_KINDS = frozenset(kind.value for kind in UpdateType)

MESSAGE_KINDS = (
    UpdateType.MESSAGE.value,
    UpdateType.EDITED_MESSAGE.value,
    UpdateType.CHANNEL_POST.value,
    UpdateType.EDITED_CHANNEL_POST.value,
)

# Class of the object each update kind carries, used to check query fields.
# Kinds missing from the installed PTB version are skipped.
PAYLOAD_CLASSES = {
    kind: getattr(telegram, name)
    for kind, name in (
        ("message", "Message"),
        ("edited_message", "Message"),
        ("channel_post", "Message"),
        ("edited_channel_post", "Message"),
        ("business_message", "Message"),
        ("edited_business_message", "Message"),
        ("callback_query", "CallbackQuery"),
        ("inline_query", "InlineQuery"),
        ("chosen_inline_result", "ChosenInlineResult"),
        ("shipping_query", "ShippingQuery"),
        ("pre_checkout_query", "PreCheckoutQuery"),
        ("poll", "Poll"),
        ("poll_answer", "PollAnswer"),
        ("my_chat_member", "ChatMemberUpdated"),
        ("chat_member", "ChatMemberUpdated"),
        ("chat_join_request", "ChatJoinRequest"),
        ("message_reaction", "MessageReactionUpdated"),
        ("message_reaction_count", "MessageReactionCountUpdated"),
        ("chat_boost", "ChatBoostUpdated"),
        ("removed_chat_boost", "ChatBoostRemoved"),
    )
    if hasattr(telegram, name)
}


def _check_field(kind: str, field: str, query: str) -> None:
    if ":" in field:
        raise ValueError(f"Nested fields are not supported in query {query!r}")
    payload_class = PAYLOAD_CLASSES.get(kind, Message if not kind else None)
    if payload_class is None:
        return
    attribute = getattr(payload_class, field, None) if not field.startswith("_") else None
    if attribute is None or callable(attribute):
        raise ValueError(f"Unknown field {field!r} in query {query!r}")


def parse_query(query: str) -> Tuple[Tuple[str, ...], Optional[str]]:
    """Split ``"kind:field"`` into the update attributes to inspect and the field to require."""
    kind, _, field = query.partition(":")
    if kind and kind not in UPDATE_KINDS:
        raise ValueError(f"Unknown update kind {kind!r} in query {query!r}")
    if not kind and not field:
        raise ValueError(f"Empty query {query!r}")
    if field:
        _check_field(kind, field, query)
    kinds = (kind,) if kind else MESSAGE_KINDS
    return kinds, field or None


def normalize_matcher(matcher) -> Tuple[Query, ...]:
    """Turn a single query or a collection of queries into a validated tuple."""
    if isinstance(matcher, (str, BaseFilter)):
        items = (matcher,)
    elif isinstance(matcher, Iterable):
        items = tuple(matcher)
    else:
        raise TypeError(f"Expected a query string, a filter or a list of them, got {type(matcher).__name__}")

    if not items:
        raise ValueError("At least one query is required")

    for item in items:
        if isinstance(item, str):
            parse_query(item)
        elif not isinstance(item, BaseFilter):
            raise TypeError(f"Unsupported query {item!r}")
    return items


def matches_query(update: Update, query: Query) -> bool:
    if isinstance(query, BaseFilter):
        return bool(query.check_update(update))

    kinds, field = parse_query(query)
    for kind in kinds:
        payload = getattr(update, kind, None)
        if payload is None:
            continue
        if field is None or getattr(payload, field, None):
            return True
    return False


def matches_any(update: Update, queries: Iterable[Query]) -> bool:
    return any(matches_query(update, query) for query in queries)


def normalize_patterns(patterns) -> Tuple[Pattern, ...]:
    if isinstance(patterns, (str, re.Pattern)):
        items = (patterns,)
    else:
        items = tuple(patterns)

    for item in items:
        if not isinstance(item, (str, re.Pattern)):
            raise TypeError(f"Text patterns must be strings or compiled regexes, got {item!r}")
    return items


def update_text(update: Update) -> Optional[str]:
    message = update.effective_message
    if message is None:
        return None
    return message.text or message.caption


def matches_text(update: Update, patterns: Iterable[Pattern]) -> bool:
    """Strings must equal the message text, regexes only need to be found in it."""
    text = update_text(update)
    if text is None:
        return False

    for pattern in patterns:
        if isinstance(pattern, str):
            if text == pattern:
                return True
        elif pattern.search(text):
            return True
    return False
