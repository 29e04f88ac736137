import base64
from datetime import date, datetime, timezone

import pytest

from postkeep.posts import MIN_PUBLISH_DATE, PostForm, date_picker_allows


def fill(form, **values):
    for name, value in values.items():
        form.set(name, value)


def test_blank_form_defaults(manager):
    form = PostForm(manager)
    assert not form.is_editing
    assert form.heading == "Create Post"
    assert form.values["category"] == "Technology"
    assert form.values["priority"] == "Medium"
    assert form.values["is_published"] is False
    assert form.values["publish_date"].tzinfo is not None


def test_submit_creates_post_and_resets(manager):
    form = PostForm(manager)
    fill(form, title="From the form", content="Typed into the editor.", author="Rae")

    outcome = form.submit()
    assert outcome.ok
    assert manager.get(outcome.record.id).title == "From the form"
    assert outcome.record.image_url is None
    assert form.values["title"] == ""


def test_submit_keeps_values_and_errors_when_invalid(manager):
    form = PostForm(manager)
    fill(form, title="ab", content="Long enough content.", author="Rae")

    outcome = form.submit()
    assert not outcome.ok
    assert form.errors == {"title": ["Title must be at least 3 characters long."]}
    assert form.values["title"] == "ab"
    assert manager.all() == []

    form.set("title", "abc")
    assert "title" not in form.errors
    assert form.submit().ok


def test_edit_form_prefills_and_updates(manager, post_payload):
    post = manager.create(post_payload()).record
    form = PostForm(manager, post)
    assert form.is_editing
    assert form.heading == "Update Post"
    assert form.values["title"] == post.title
    assert "id" not in form.values

    form.set("priority", "High")
    outcome = form.submit()
    assert outcome.ok
    assert manager.get(post.id).priority == "High"
    assert form.values["priority"] == "High"


def test_cancel_discards_pending_edits(manager, post_payload):
    post = manager.create(post_payload()).record
    form = PostForm(manager, post)
    form.set("title", "Unsaved change")
    form.cancel()
    assert form.values["title"] == post.title
    assert manager.get(post.id) == post


def test_unknown_form_field(manager):
    with pytest.raises(KeyError):
        PostForm(manager).set("subtitle", "nope")


def test_date_picker_lower_bound(manager):
    assert date_picker_allows(MIN_PUBLISH_DATE)
    assert not date_picker_allows(date(1899, 12, 31))
    assert date_picker_allows(datetime(2024, 1, 1, tzinfo=timezone.utc))

    form = PostForm(manager)
    fill(form, title="Old news", content="From a long time ago.", author="Rae")
    assert not form.set_publish_date(date(1850, 1, 1))
    assert form.errors["publish_date"] == ["Choose a date on or after 1900-01-01."]
    assert not form.submit().ok

    form.set("publish_date", date(1900, 1, 1))
    assert "publish_date" not in form.errors
    outcome = form.submit()
    assert outcome.ok
    assert outcome.record.publish_date == datetime(1900, 1, 1, tzinfo=timezone.utc)


def test_attach_image_encodes_data_url(manager, tmp_path):
    image = tmp_path / "cover.png"
    image.write_bytes(b"\x89PNG fake bytes")
    form = PostForm(manager)

    assert form.attach_image(image)
    expected = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake bytes").decode("ascii")
    assert form.values["image_url"] == expected


def test_attach_image_rejects_non_images(manager, tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not a picture")
    form = PostForm(manager)

    assert not form.attach_image(notes)
    assert "image_url" in form.errors
    assert not form.attach_image(tmp_path / "missing.png")


def test_publish_date_accepts_iso_strings(manager):
    form = PostForm(manager)
    form.set("publish_date", "2024-01-01")
    assert form.values["publish_date"] == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert "publish_date" not in form.errors
    assert date_picker_allows("1900-01-01T00:00:00Z")

    assert not form.set_publish_date("1899-12-31")
    assert form.errors["publish_date"] == ["Choose a date on or after 1900-01-01."]


def test_unreadable_publish_date_is_a_form_error(manager):
    form = PostForm(manager)
    assert not form.set_publish_date("next tuesday")
    assert form.errors["publish_date"] == ["Invalid date value 'next tuesday'"]
