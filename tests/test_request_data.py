"""Tests for request body folding."""

import io

from werkzeug.datastructures import FileStorage, MultiDict

from nexus_cms.utils.request_data import is_null, request_payload, unflatten


class TestUnflatten:
    def test_bracket_keys_become_nested_lists(self):
        form = MultiDict(
            [
                ("sections[1][content]", "second"),
                ("sections[0][content]", "first"),
                ("sections[0][caption]", "cap"),
            ]
        )

        data = unflatten(form)

        assert data["sections"] == [{"content": "first", "caption": "cap"}, {"content": "second"}]

    def test_files_join_their_form_siblings(self):
        upload = FileStorage(stream=io.BytesIO(b"x"), filename="a.png")
        form = MultiDict([("sections[0][content]", "text")])
        files = MultiDict([("sections[0][image]", upload)])

        data = unflatten(form, files)

        assert data["sections"][0]["content"] == "text"
        assert data["sections"][0]["image"] is upload

    def test_empty_brackets_collect_every_value(self):
        form = MultiDict([("tags[]", "steel"), ("tags[]", "bridges"), ("title", "T")])
        assert unflatten(form) == {"tags": ["steel", "bridges"], "title": "T"}

    def test_repeated_plain_key_keeps_first_value(self):
        form = MultiDict([("title", "one"), ("title", "two")])
        assert unflatten(form) == {"title": "one"}


class TestRequestPayload:
    def test_json_body_passes_through(self, app):
        with app.test_request_context("/", method="POST", json={"ids": ["a", "b"]}):
            assert request_payload() == {"ids": ["a", "b"]}

    def test_non_object_json_is_empty(self, app):
        with app.test_request_context("/", method="POST", json=["a"]):
            assert request_payload() == {}

    def test_multipart_is_folded(self, app):
        with app.test_request_context(
            "/",
            method="POST",
            data={"discipline_ids[]": ["x", "y"], "cover_photo": (io.BytesIO(b"x"), "c.png")},
            content_type="multipart/form-data",
        ):
            data = request_payload()
            assert data["discipline_ids"] == ["x", "y"]
            assert data["cover_photo"].filename == "c.png"


def test_null_markers():
    assert is_null(None)
    assert is_null("")
    assert is_null(" NULL ")
    assert not is_null("0")
    assert not is_null(0)
