# tests/test_identity.py
"""Tests for identifier allocation."""

from types import SimpleNamespace

from vidstore.storage.identity import next_id


class TestNextId:
    def test_empty(self):
        assert next_id([]) == 1

    def test_max_plus_one(self):
        items = [SimpleNamespace(id=3), SimpleNamespace(id=7), SimpleNamespace(id=5)]
        assert next_id(items) == 8

    def test_gaps_not_reused(self):
        assert next_id([SimpleNamespace(id=1), SimpleNamespace(id=10)]) == 11

    def test_accepts_generator(self, sample_comments):
        assert next_id(c for c in sample_comments) == 4
