from flask import request

from sexed.utils.errors import ValidationError


def json_body():
    """Parsed JSON object from the request; anything else is a 400."""
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid or missing JSON body")
    return data


def require_fields(data, *fields):
    missing = [f for f in fields if data.get(f) in (None, "") or (
        isinstance(data.get(f), str) and not data.get(f).strip()
    )]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def require_choice(value, choices, field):
    if value not in choices:
        raise ValidationError(
            f"Invalid {field} '{value}'. Allowed: {', '.join(choices)}"
        )


def require_strings(data, *fields):
    """Fields that are present (not null) must be JSON strings."""
    wrong = [f for f in fields if data.get(f) is not None and not isinstance(data.get(f), str)]
    if wrong:
        raise ValidationError(f"Fields must be text: {', '.join(wrong)}")
