"""Unit tests for LocalSessionStorage."""

import json

import pytest

from vip_reader.core import Identity
from vip_reader.io import LocalSessionStorage


@pytest.fixture
def storage(tmp_path):
    return LocalSessionStorage(tmp_path)


@pytest.fixture
def identity():
    return Identity.from_dict({"id": "u1", "email": "reader@example.com", "name": "Reader"})


class TestLocalSessionStorage:
    def test_missing_file_means_no_session(self, storage):
        assert storage.load() is None

    def test_save_then_load(self, storage, identity):
        storage.save(identity, "tok")
        assert storage.load() == (identity, "tok")

    def test_missing_token_means_no_session(self, storage, identity):
        storage.path.write_text(json.dumps({"user": identity.to_dict()}))
        assert storage.load() is None

    def test_missing_user_means_no_session(self, storage):
        storage.path.write_text(json.dumps({"token": "tok"}))
        assert storage.load() is None

    def test_corrupt_file_means_no_session(self, storage):
        storage.path.write_text("{not json")
        assert storage.load() is None

    def test_save_identity_keeps_token(self, storage, identity):
        storage.save(identity, "tok")
        upgraded = identity.with_vip("sub_1")

        storage.save_identity(upgraded)

        assert storage.load() == (upgraded, "tok")

    def test_clear_removes_both_entries(self, storage, identity):
        storage.save(identity, "tok")
        storage.clear()
        assert storage.load() is None
        assert not storage.path.exists()

    def test_clear_without_file_is_noop(self, storage):
        storage.clear()
