"""
Service-level exception hierarchy.

Services raise these; the application factory registers one handler per
type so every blueprint answers with the same status codes:

    NotFoundError        → 404
    ValidationError      → 400
    SlugResolutionError  → 400 (carries the 1-based offending index)
    ConflictError        → 409

Usage:
    from customer_model.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Profile", resource_id="novice")
    raise ValidationError("steps must be an array", details={"steps": "array required"})
"""


class NotFoundError(Exception):
    """Raised when a key lookup yields no row.

    Args:
        resource: Human-readable entity name (e.g. "Profile", "Scenario").
        resource_id: The key that was looked up. Logged, not returned to clients.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ValidationError(Exception):
    """Raised when a request payload is missing fields or has invalid values.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown for structured API responses.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class SlugResolutionError(ValidationError):
    """Raised when an ordered item references a vocabulary slug that does not exist.

    The whole replacement is rolled back before this propagates.

    Args:
        item_label: "step" or "capability", used in the message.
        index: 1-based position of the offending item in the submitted list.
        dev_approach: The dev-approach slug as submitted.
        partner_approach: The partner-approach slug as submitted.
    """

    def __init__(
        self,
        item_label: str,
        index: int,
        dev_approach: str | None,
        partner_approach: str | None,
    ) -> None:
        self.item_label = item_label
        self.index = index
        self.dev_approach = dev_approach
        self.partner_approach = partner_approach
        super().__init__(
            f"Invalid approach slug at {item_label} {index}",
            details={
                "index": index,
                "dev_approach": dev_approach,
                "partner_approach": partner_approach,
            },
        )


class ConflictError(Exception):
    """Raised when a write would duplicate a unique key.

    Args:
        resource: Entity name.
        field: The unique field that would be duplicated.
        value: The conflicting value.
    """

    def __init__(self, resource: str, field: str, value: str | None = None) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field}={value!r} already exists")
