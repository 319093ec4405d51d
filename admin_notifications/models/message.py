"""Email message models.

Defines the outbound message handed to the mail transport, the rendered
subject/body pair produced by templates, and the notification type enum.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(html: str) -> str:
    """Remove every ``<...>`` sequence from ``html``.

    This is a plain tag strip, not an HTML-to-text conversion: entities are
    left encoded and whitespace is preserved.
    """
    return _TAG_PATTERN.sub("", html)


class NotificationType(str, Enum):
    """Recipient-resolution key for each event kind.

    Attributes:
        NEW_LEADS: Contact form leads.
        JOB_APPLICATIONS: Job applications.
        REVIEWS: Client reviews.
        SYSTEM_ALERTS: Operational alerts.
    """

    NEW_LEADS = "new-leads"
    JOB_APPLICATIONS = "job-applications"
    REVIEWS = "reviews"
    SYSTEM_ALERTS = "system-alerts"


class RenderedEmail(BaseModel):
    """Subject and HTML body produced by an event template."""

    subject: str = Field(..., min_length=1, description="Email subject line")
    html: str = Field(..., description="Standalone HTML document")


class OutboundMessage(BaseModel):
    """Message consumed once by the mail transport.

    Attributes:
        to: Recipient addresses, joined with ", " on the wire.
        subject: Email subject line.
        html: HTML-formatted email body.
        text: Plain-text body; tag-stripped ``html`` when omitted.
        from_address: Sender override (``from`` on input).
    """

    to: list[str] = Field(..., min_length=1, description="Recipient addresses")
    subject: str = Field(..., description="Email subject line")
    html: str = Field(..., description="HTML-formatted email body")
    text: str | None = Field(default=None, description="Plain-text email body")
    from_address: str | None = Field(
        default=None, alias="from", description="Sender address override"
    )

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("to", mode="before")
    @classmethod
    def coerce_single_recipient(cls, v):
        """Accept a single address as well as a list."""
        if isinstance(v, str):
            return [v]
        return v

    @property
    def recipients_header(self) -> str:
        """Value of the ``To`` header."""
        return ", ".join(self.to)

    @property
    def text_body(self) -> str:
        """Plain-text body, falling back to the tag-stripped HTML."""
        return self.text if self.text else strip_tags(self.html)
