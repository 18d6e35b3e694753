import pytest

from app.lib.validation import ErrorCode, GRADE_CHOICES, SubmissionRequest, validate_submission


def _valid(**overrides):
    data = {
        "name": "Ana",
        "email": "ana@x.com",
        "message": "Need help",
        "grade": "Form 1–3 (JCE)",
        "subjects": "Math, Physics",
    }
    data.update(overrides)
    return data


def test_valid_record_yields_typed_request():
    result = validate_submission(_valid())
    assert result.ok
    assert result.errors == {}
    assert isinstance(result.request, SubmissionRequest)
    assert result.request.subjects == "Math, Physics"


def test_values_are_trimmed():
    result = validate_submission(_valid(name="  Ana  ", subjects=" Math "))
    assert result.request.name == "Ana"
    assert result.request.subjects == "Math"


@pytest.mark.parametrize("field", ["name", "email", "message", "grade", "subjects"])
@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
def test_blank_fields_are_required(field, blank):
    result = validate_submission(_valid(**{field: blank}))
    assert not result.ok
    assert result.request is None
    assert result.errors[field].code is ErrorCode.REQUIRED
    assert set(result.errors) == {field}


def test_missing_field_is_required():
    data = _valid()
    del data["subjects"]
    result = validate_submission(data)
    assert result.errors["subjects"].code is ErrorCode.REQUIRED
    assert result.errors["subjects"].message == "Subjects are required"


@pytest.mark.parametrize("email", ["ana", "ana@", "@x.com", "ana@x", "ana x@x.com"])
def test_malformed_email_is_invalid_format(email):
    result = validate_submission(_valid(email=email))
    assert result.errors["email"].code is ErrorCode.INVALID_FORMAT
    assert result.errors["email"].message == "Invalid email address"


@pytest.mark.parametrize("grade", ["Form 6", "form 1–3 (jce)", "Form 1-3 (JCE)"])
def test_unknown_grade_is_invalid_choice(grade):
    result = validate_submission(_valid(grade=grade))
    assert result.errors["grade"].code is ErrorCode.INVALID_CHOICE


def test_every_grade_choice_is_accepted():
    for grade in GRADE_CHOICES:
        assert validate_submission(_valid(grade=grade)).ok


def test_non_string_value_is_invalid_format():
    result = validate_submission(_valid(name=42))
    assert result.errors["name"].code is ErrorCode.INVALID_FORMAT


def test_collects_one_error_per_failing_field():
    result = validate_submission({"email": "nope", "grade": "Form 9"})
    assert {k: v.code for k, v in result.errors.items()} == {
        "name": ErrorCode.REQUIRED,
        "email": ErrorCode.INVALID_FORMAT,
        "message": ErrorCode.REQUIRED,
        "grade": ErrorCode.INVALID_CHOICE,
        "subjects": ErrorCode.REQUIRED,
    }


def test_field_error_serializes_code_and_message():
    err = validate_submission(_valid(message=""))
    assert err.errors["message"].as_dict() == {"code": "Required", "message": "Message is required"}


@pytest.mark.parametrize("email", ["ana@school.test", "ana@host.local", "ana.b+tutor@mail.school.org"])
def test_special_use_domains_are_accepted(email):
    result = validate_submission(_valid(email=email))
    assert result.ok
    assert result.request.email == email
