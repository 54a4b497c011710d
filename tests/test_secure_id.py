"""Tests for the encoded id codec."""

import pytest

from nexus_cms.utils.secure_id import decode_id, encode_id

SECRET = "unit-test-secret"


class TestRoundTrip:
    @pytest.mark.parametrize("value", [1, 42, 2**31 - 1])
    def test_decode_reverses_encode(self, value):
        assert decode_id(encode_id(value, SECRET), SECRET) == value

    def test_encoding_is_stable(self):
        assert encode_id(7, SECRET) == encode_id(7, SECRET)

    def test_distinct_ids_give_distinct_tokens(self):
        assert encode_id(7, SECRET) != encode_id(8, SECRET)

    def test_token_is_url_safe(self):
        token = encode_id(123456, SECRET)
        assert "=" not in token
        assert "+" not in token and "/" not in token

    def test_uses_app_secret_by_default(self, app):
        token = encode_id(5)
        assert decode_id(token) == 5
        assert decode_id(token, app.config["SECRET_KEY"]) == 5


class TestRejection:
    @pytest.mark.parametrize("token", [None, "", "abc", "!!!!", "not-a-token-at-all", 123])
    def test_garbage_decodes_to_none(self, token):
        assert decode_id(token, SECRET) is None

    def test_foreign_secret_is_rejected(self):
        token = encode_id(9, "some-other-secret")
        assert decode_id(token, SECRET) is None

    def test_tampered_token_is_rejected(self):
        token = encode_id(9, SECRET)
        flipped = ("A" if token[0] != "A" else "B") + token[1:]
        assert decode_id(flipped, SECRET) is None

    def test_non_positive_id_is_rejected(self):
        assert decode_id(encode_id(0, SECRET), SECRET) is None
