# models/base.py
#
# Shared pydantic configuration for records kept in the JSON snapshots.

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from core.errors import ValidationError
from core.time_utils import to_local_naive


class WireModel(BaseModel):
    """A record as stored: camelCase keys on the wire, snake_case in Python.

    Keys the model does not declare are kept and written back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

    @classmethod
    def from_record(cls, record: dict):
        return cls.model_validate(record)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FormModel(BaseModel):
    """Values submitted from a form, checked before anything is written."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid", coerce_numbers_to_str=True)


def local_datetime(value):
    return to_local_naive(value) if value is not None else None


def date_as_datetime(value):
    """A bare date means midnight of that day."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def _is_blank_input(error: dict) -> bool:
    if error["type"] == "missing":
        return True
    value = error.get("input")
    return value is None or (isinstance(value, str) and not value.strip())


def validation_error(exc: SchemaError) -> ValidationError:
    """Translate a pydantic error into the ValidationError the pages show."""
    fields, blank = [], True
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__root__"
        if name not in fields:
            fields.append(name)
        blank = blank and _is_blank_input(error)

    if blank:
        return ValidationError("Please fill in all required fields", fields=fields)
    first = exc.errors()[0]
    return ValidationError(f"Invalid {', '.join(fields)}: {first['msg']}", fields=fields)


def parse_form(model, **values):
    try:
        return model(**values)
    except SchemaError as e:
        raise validation_error(e) from None
