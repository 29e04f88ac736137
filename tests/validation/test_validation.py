import pytest

from postkeep.core import BooleanField, Record, StringField, UUIDField
from postkeep.validation import (
    DuplicateIdentifierError,
    MinLengthValidator,
    RegexValidator,
    ValidationError,
    check_payload,
    clean_payload,
)


class Profile(Record):
    id = UUIDField()
    username = StringField(
        nullable=False,
        immutable=True,
        validators=[RegexValidator(r"^[a-z0-9_]+$", "Lowercase letters only.")],
    )
    bio = StringField(validators=[MinLengthValidator(5, "Bio is too short.")])
    tier = StringField(nullable=False, choices=("free", "pro"), default="free")
    active = BooleanField()


def test_field_validation_error():
    profile = Profile(username="Invalid-Name")
    with pytest.raises(ValidationError) as excinfo:
        profile.full_clean()
    assert excinfo.value.errors["username"] == ["Lowercase letters only."]


def test_record_clean_hook():
    class Account(Record):
        id = UUIDField()
        email = StringField(nullable=False)
        confirm_email = StringField(nullable=False)

        def clean(self):
            if self.email != self.confirm_email:
                raise ValidationError({"email": ["Emails must match."]})

    account = Account(email="a@example.com", confirm_email="b@example.com")
    with pytest.raises(ValidationError) as excinfo:
        account.full_clean()
    assert excinfo.value.errors["email"] == ["Emails must match."]


def test_clean_payload_applies_defaults_and_accepts_storage_keys():
    values = clean_payload(Profile, {"username": "alice", "active": "true"})
    assert values == {"username": "alice", "bio": None, "tier": "free", "active": True}


def test_clean_payload_collects_every_field_error():
    with pytest.raises(ValidationError) as excinfo:
        clean_payload(Profile, {"bio": "hi", "tier": "gold", "nickname": "x"})
    errors = excinfo.value.errors
    assert errors["username"] == ["This field is required."]
    assert errors["bio"] == ["Bio is too short."]
    assert errors["tier"] == ["Invalid value 'gold'. Expected one of: free, pro."]
    assert errors["__all__"] == ["Unknown field 'nickname'."]


def test_primary_key_cannot_be_supplied_by_callers():
    result = check_payload(Profile, {"id": "chosen", "username": "bob"})
    assert not result.is_valid
    assert result.errors == {"id": ["This field cannot be edited."]}


def test_partial_payload_only_cleans_supplied_fields():
    values = clean_payload(Profile, {"bio": "long enough"}, partial=True)
    assert values == {"bio": "long enough"}


def test_immutable_field_cannot_change_on_update():
    profile = Profile(username="carol")
    result = check_payload(Profile, {"username": "dave"}, partial=True, instance=profile)
    assert result.errors == {"username": ["This field cannot be changed."]}

    same = check_payload(Profile, {"username": "carol"}, partial=True, instance=profile)
    assert same.is_valid


def test_stored_payload_requires_primary_key():
    with pytest.raises(ValidationError) as excinfo:
        clean_payload(Profile, {"username": "erin"}, include_primary_key=True)
    assert excinfo.value.errors == {"id": ["This field is required."]}


def test_check_payload_rejects_non_mapping():
    result = check_payload(Profile, ["not", "a", "mapping"])
    assert result.errors["__all__"] == ["Expected a mapping, received list."]


def test_duplicate_identifier_error_message():
    error = DuplicateIdentifierError("element_id", "login")
    assert error.errors == {"element_id": ["This ID is already in use. Please choose a unique ID."]}
    assert error.value == "login"
    assert isinstance(error, ValidationError)
