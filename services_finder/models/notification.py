"""User-facing notification (the JSON counterpart of a UI toast)."""

from pydantic import BaseModel

from services_finder.models.enums import NotificationVariant


class Notification(BaseModel):
    """A single message shown to the end user."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.default

    @classmethod
    def error(cls, description: str, title: str = "Error") -> "Notification":
        return cls(
            title=title,
            description=description,
            variant=NotificationVariant.destructive,
        )
