"""Unit tests for hashing utilities."""

from lqa_review.utils.hashing import hash_string


class TestHashString:
    """Tests for hash_string function."""

    def test_known_digest(self):
        assert hash_string("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_deterministic(self):
        assert hash_string("Bonjour") == hash_string("Bonjour")

    def test_length_and_hex(self):
        digest = hash_string("Le chat est assis sur le tapis")

        assert len(digest) == 64
        int(digest, 16)

    def test_case_sensitive(self):
        assert hash_string("Save") != hash_string("save")

    def test_unicode(self):
        assert len(hash_string("日本語 テキスト 🎉")) == 64
