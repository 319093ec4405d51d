"""Notification event models.

Typed payloads describing one occurrence of a business event that admins
are emailed about. Events are transient: built by the caller when the
triggering record is saved and consumed once by the dispatcher.

Field names accept both the camelCase keys posted by the website forms
(``fullName``) and snake_case Python names (``full_name``).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_POSITION = "General Position"


class NotificationEvent(BaseModel):
    """Base model for notification events."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class JobApplicationEvent(NotificationEvent):
    """A job application submitted through the careers form.

    Attributes:
        full_name: Applicant full name.
        email: Applicant email address.
        phone: Applicant phone number.
        position: Position applied for; "General Position" when absent.
        experience: Self-reported experience bracket (e.g., "1-3 years").
    """

    full_name: str = Field(..., min_length=1, description="Applicant name")
    email: str = Field(..., description="Applicant email")
    phone: str = Field(..., description="Applicant phone")
    position: str | None = Field(default=None, description="Position applied for")
    experience: str = Field(..., description="Experience bracket")

    @property
    def position_or_default(self) -> str:
        return self.position or DEFAULT_POSITION


class LeadEvent(NotificationEvent):
    """A lead submitted through the contact form.

    Attributes:
        name: Contact name.
        email: Contact email address.
        phone: Contact phone number (optional).
        service: Service the lead is interested in.
        message: Free-text message.
    """

    name: str = Field(..., min_length=1, description="Contact name")
    email: str = Field(..., description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    service: str = Field(..., description="Requested service")
    message: str = Field(..., description="Lead message")


class ReviewEvent(NotificationEvent):
    """A client review submitted for moderation.

    Attributes:
        reviewer_name: Reviewer name.
        company: Reviewer company.
        rating: Star rating, 1 to 5.
        category: Service category reviewed.
    """

    reviewer_name: str = Field(..., min_length=1, description="Reviewer name")
    company: str = Field(..., description="Reviewer company")
    rating: int = Field(..., ge=1, le=5, description="Star rating")
    category: str = Field(..., description="Service category")


class AlertSeverity(str, Enum):
    """Severity of a system alert; selects the email header colors."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class SystemAlertEvent(NotificationEvent):
    """An operational alert raised by the system.

    Attributes:
        title: Alert title, used in the subject and header.
        message: Alert body.
        severity: info, warning or error.
    """

    title: str = Field(..., min_length=1, description="Alert title")
    message: str = Field(..., description="Alert message")
    severity: AlertSeverity = Field(..., description="Alert severity")
