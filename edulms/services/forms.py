from urllib.parse import urlparse


class FormValidationError(ValueError):
    """A form was submitted without a required field or with a bad value."""


def require_fields(**fields) -> None:
    missing = [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise FormValidationError(f"Please fill in: {', '.join(missing)}")


def require_url(name: str, value: str) -> None:
    parsed = urlparse(value.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FormValidationError(f"{name} must be an http(s) URL")
