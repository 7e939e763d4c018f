"""Validation failures raised by the slide lifecycle."""

from __future__ import annotations

from ..exceptions import AppError, NotFoundError


class SlideValidationError(AppError):
    """Base class for user-visible slide request errors."""


class SlideNotFoundError(SlideValidationError, NotFoundError):
    """Raised when no slide has the requested id."""

    def __init__(self, slide_id: object) -> None:
        super().__init__(f"Slide ID {slide_id} does not exist")
        self.slide_id = slide_id


class DuplicateAssetError(SlideValidationError):
    """Raised when another slide already owns an image filename."""

    def __init__(self, image_name: str) -> None:
        super().__init__(f"Slide already exists with image name {image_name}")
        self.image_name = image_name


class DuplicateIdError(SlideValidationError):
    """Raised when a re-key targets an id held by another slide."""

    def __init__(self, slide_id: int) -> None:
        super().__init__(f"Slide ID {slide_id} already exists")
        self.slide_id = slide_id


class AssetMissingError(SlideValidationError):
    """Raised when an update names an image that was never uploaded."""

    def __init__(self, image_name: str) -> None:
        super().__init__(
            f"Image {image_name} does not exist on the server; upload it before updating"
        )
        self.image_name = image_name


class UnknownFieldError(SlideValidationError):
    """Raised when an update patch carries a key outside the allow-list."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Too many fields given: unknown field '{field_name}'")
        self.field_name = field_name


class MissingLocatorError(SlideValidationError):
    """Raised when an update patch does not name the slide to change."""

    def __init__(self) -> None:
        super().__init__("ID field missing in update")


class InvalidValueError(SlideValidationError):
    """Raised when a field value has the wrong type or range."""


class InvalidAssetNameError(SlideValidationError):
    """Raised when an image filename cannot be stored safely."""

    def __init__(self, image_name: str) -> None:
        super().__init__(f"Invalid image name {image_name!r}")
        self.image_name = image_name


class UnsupportedMediaError(SlideValidationError):
    """Raised when an upload Content-Type is not an allowed image type."""


class PayloadTooLargeError(SlideValidationError):
    """Raised when an upload exceeds the configured size cap."""
