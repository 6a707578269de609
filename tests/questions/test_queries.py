import re

import pytest
from telegram import PhotoSize
from telegram.ext import filters

from questions.queries import matches_any, matches_query, matches_text, normalize_matcher, normalize_patterns

PHOTO = (PhotoSize(file_id="file", file_unique_id="unique", width=10, height=10),)


def test_kind_query(updates):
    update = updates.message("hello")

    assert matches_query(update, "message")
    assert not matches_query(update, "callback_query")


def test_kind_and_field_query(updates):
    text_update = updates.message("hello")
    photo_update = updates.message(caption="look", photo=PHOTO)

    assert matches_query(text_update, "message:text")
    assert not matches_query(text_update, "message:photo")
    assert matches_query(photo_update, "message:photo")
    assert not matches_query(photo_update, "message:text")


def test_field_only_query_matches_any_message_kind(updates):
    assert matches_query(updates.message(caption="look", photo=PHOTO), ":photo")
    assert not matches_query(updates.callback("yes"), ":text")


def test_callback_query(updates):
    update = updates.callback("yes")

    assert matches_query(update, "callback_query:data")
    assert not matches_query(update, "message:text")


def test_filter_object_query(updates):
    assert matches_query(updates.message("hello"), filters.TEXT)
    assert not matches_query(updates.message(caption="look", photo=PHOTO), filters.TEXT)


def test_matches_any(updates):
    queries = normalize_matcher(["message:text", "callback_query:data"])

    assert matches_any(updates.message("hello"), queries)
    assert matches_any(updates.callback("yes"), queries)
    assert not matches_any(updates.message(caption="look", photo=PHOTO), queries)


def test_normalize_matcher_rejects_empty_and_foreign_values():
    with pytest.raises(ValueError):
        normalize_matcher([])
    with pytest.raises(TypeError):
        normalize_matcher(42)
    with pytest.raises(TypeError):
        normalize_matcher(["message", 42])


def test_string_patterns_match_exactly(updates):
    assert matches_text(updates.message("/cancel"), normalize_patterns("/cancel"))
    assert not matches_text(updates.message("/cancel now"), normalize_patterns("/cancel"))


def test_regex_patterns_search(updates):
    patterns = normalize_patterns([re.compile(r"^stop$", re.IGNORECASE), "/cancel"])

    assert matches_text(updates.message("STOP"), patterns)
    assert matches_text(updates.message("/cancel"), patterns)
    assert not matches_text(updates.message("don't stop"), patterns)


def test_text_patterns_use_caption(updates):
    assert matches_text(updates.message(caption="/cancel", photo=PHOTO), normalize_patterns("/cancel"))


def test_text_patterns_without_text(updates):
    assert not matches_text(updates.message(photo=PHOTO), normalize_patterns("/cancel"))


def test_normalize_patterns_rejects_other_types():
    with pytest.raises(TypeError):
        normalize_patterns(["/cancel", 1])
