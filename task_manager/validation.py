"""
Request payload validation.

Pydantic runs every field rule and reports all violations at once; this
module turns its error list into the field-error entries clients expect.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from task_manager.errors import ValidationFailed, field_error

ModelT = TypeVar("ModelT", bound=BaseModel)


TASK_FIELD_MESSAGES: Dict[str, str] = {
    "title": "Task title must be between 1 and 100 characters",
    "description": "Task description cannot exceed 500 characters",
    "category": "Invalid category",
    "priority": "Invalid priority level",
    "dueDate": "Invalid date format",
    "completed": "Completed must be a boolean value",
}

USER_FIELD_MESSAGES: Dict[str, str] = {
    "username": "Username must be between 3 and 30 characters",
    "email": "Please provide a valid email",
    "password": "Password must be at least 6 characters long",
    "password:password_too_long": "Password cannot exceed 72 bytes",
}

LOGIN_FIELD_MESSAGES: Dict[str, str] = {
    "email": "Please provide a valid email",
    "password": "Password is required",
}


def public_path(schema: Type[BaseModel], loc: Tuple[Any, ...]) -> str:
    """Dotted error location, naming the top-level field by its alias."""
    parts = [str(part) for part in loc]
    field = schema.model_fields.get(parts[0]) if parts else None
    if field is not None and field.alias:
        parts[0] = field.alias
    return ".".join(parts)


def collect_field_errors(
    exc: ValidationError,
    messages: Mapping[str, str],
    schema: Optional[Type[BaseModel]] = None,
) -> List[Dict[str, Any]]:
    """
    One entry per violated field, in the order pydantic reported them.

    A message keyed "<path>:<error type>" wins over the plain "<path>" one.
    """
    errors: List[Dict[str, Any]] = []
    seen = set()
    for err in exc.errors():
        if schema is not None:
            path = public_path(schema, err["loc"])
        else:
            path = ".".join(str(part) for part in err["loc"])
        if path in seen:
            continue
        seen.add(path)
        msg = messages.get(f"{path}:{err['type']}") or messages.get(path, err["msg"])
        value = None if err["type"] == "missing" else err.get("input")
        errors.append(field_error(path, msg, value))
    return errors


def validate_payload(schema: Type[ModelT], payload: Any, messages: Mapping[str, str]) -> ModelT:
    """
    Validate a raw request body against schema.

    Raises:
        ValidationFailed: carrying every field violation
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed(collect_field_errors(exc, messages, schema)) from None
