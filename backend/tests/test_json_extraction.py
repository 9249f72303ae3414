"""Tests for recovering JSON objects from model output."""

from __future__ import annotations

import pytest

from app.utils.exceptions import MalformedResponseError
from app.utils.json_extraction import extract_json


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_json_fence_wins_over_other_fences(self):
        text = 'Here:\n```\n{"wrong": true}\n```\nand\n```JSON\n{"right": true}\n```'
        assert extract_json(text) == {"right": True}

    def test_unlabelled_fence(self):
        assert extract_json('```\n{"price": 5}\n```') == {"price": 5}

    def test_prose_around_braces(self):
        text = 'Sure! The record is {"property_id": "EG-1", "nested": {"x": 1}} hope that helps'
        assert extract_json(text) == {"property_id": "EG-1", "nested": {"x": 1}}

    def test_no_braces(self):
        with pytest.raises(MalformedResponseError, match="No JSON found"):
            extract_json("I could not find a property in that text.")

    def test_empty_and_none(self):
        with pytest.raises(MalformedResponseError):
            extract_json("")
        with pytest.raises(MalformedResponseError):
            extract_json(None)

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError, match="Invalid JSON"):
            extract_json("{'single': 'quotes'}")

    def test_malformed_error_is_value_error(self):
        with pytest.raises(ValueError):
            extract_json("nothing here")
