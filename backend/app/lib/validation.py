# app/lib/validation.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

GRADE_CHOICES = (
    "Standard 1–7 (PSLE)",
    "Form 1–3 (JCE)",
    "Form 4–5 (BGCSE)",
)

FIELDS = ("name", "email", "message", "grade", "subjects")


class ErrorCode(str, Enum):
    REQUIRED = "Required"
    INVALID_FORMAT = "InvalidFormat"
    INVALID_CHOICE = "InvalidChoice"


REQUIRED_MESSAGES = {
    "name": "Name is required",
    "email": "Email is required",
    "message": "Message is required",
    "grade": "Grade is required",
    "subjects": "Subjects are required",
}
INVALID_EMAIL_MESSAGE = "Invalid email address"
INVALID_GRADE_MESSAGE = "Please select a valid grade"


class SubmissionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    message: str
    grade: str
    subjects: str  # comma-separated, kept as typed

    @field_validator("name", "email", "message", "grade", "subjects")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(ErrorCode.REQUIRED.value, REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        # syntax only: no DNS, and special-use domains (.test, .local) are fine,
        # but the domain still needs a dot (user@domain.tld)
        try:
            info = validate_email(value, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            raise PydanticCustomError(ErrorCode.INVALID_FORMAT.value, INVALID_EMAIL_MESSAGE)
        if "." not in info.domain.strip("."):
            raise PydanticCustomError(ErrorCode.INVALID_FORMAT.value, INVALID_EMAIL_MESSAGE)
        return value

    @field_validator("grade")
    @classmethod
    def _grade_choice(cls, value: str) -> str:
        if value not in GRADE_CHOICES:
            raise PydanticCustomError(ErrorCode.INVALID_CHOICE.value, INVALID_GRADE_MESSAGE)
        return value


@dataclass(frozen=True)
class FieldError:
    code: ErrorCode
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"code": self.code.value, "message": self.message}


@dataclass
class ValidationResult:
    request: Optional[SubmissionRequest] = None
    errors: Dict[str, FieldError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors


def _to_field_error(name: str, err: Dict[str, Any]) -> FieldError:
    kind = err.get("type")
    if kind == "missing":
        return FieldError(ErrorCode.REQUIRED, REQUIRED_MESSAGES[name])
    try:
        code = ErrorCode(kind)
    except ValueError:
        # wrong JSON type (number, list, null...)
        code = ErrorCode.INVALID_FORMAT
    return FieldError(code, err.get("msg") or REQUIRED_MESSAGES[name])


def validate_submission(candidate: Mapping[str, Any]) -> ValidationResult:
    """Check a raw form record; returns the typed request or per-field errors."""
    data = {k: candidate[k] for k in FIELDS if k in candidate}
    try:
        return ValidationResult(request=SubmissionRequest.model_validate(data))
    except ValidationError as exc:
        errors: Dict[str, FieldError] = {}
        for err in exc.errors():
            loc = err.get("loc") or ()
            name = str(loc[0]) if loc else ""
            if name in FIELDS and name not in errors:
                errors[name] = _to_field_error(name, err)
        return ValidationResult(errors=errors)
