"""Jinja2 template renderer for admin notification emails.

Renders one standalone HTML document per event kind. Each ``render_*``
method is a pure function of its typed event and returns the subject and
HTML body.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from admin_notifications.config import NotificationSettings
from admin_notifications.core.exceptions import TemplateRenderError
from admin_notifications.core.logger import get_logger
from admin_notifications.models.events import (
    AlertSeverity,
    JobApplicationEvent,
    LeadEvent,
    NotificationEvent,
    ReviewEvent,
    SystemAlertEvent,
)
from admin_notifications.models.message import RenderedEmail

logger = get_logger(__name__)

MAX_RATING = 5

# (header gradient, accent color) per alert severity
SEVERITY_STYLES: dict[AlertSeverity, tuple[str, str]] = {
    AlertSeverity.ERROR: ("linear-gradient(135deg, #f093fb 0%, #f5576c 100%)", "#f5576c"),
    AlertSeverity.WARNING: ("linear-gradient(135deg, #ffecd2 0%, #fcb69f 100%)", "#fcb69f"),
    AlertSeverity.INFO: ("linear-gradient(135deg, #667eea 0%, #764ba2 100%)", "#667eea"),
}


def star_rating(rating: int) -> str:
    """Render a 1-5 rating as filled and empty stars, e.g. 3 -> "★★★☆☆"."""
    filled = max(0, min(MAX_RATING, int(rating)))
    return "★" * filled + "☆" * (MAX_RATING - filled)


class TemplateRenderer:
    """Jinja2 renderer for notification email templates.

    Attributes:
        template_dir: Directory the templates are loaded from.
        client_url: Admin panel base URL used for call-to-action links.
        company_name: Name shown in the footer.
    """

    def __init__(
        self,
        template_dir: str | None = None,
        settings: NotificationSettings | None = None,
    ) -> None:
        """Initialize template renderer.

        Args:
            template_dir: Path to templates directory (uses settings if None).
            settings: Service settings (loaded from the environment if None).

        Raises:
            TemplateRenderError: If the template directory does not exist.
        """
        settings = settings or NotificationSettings()
        self.template_dir = Path(template_dir or settings.TEMPLATE_DIR)
        self.client_url = settings.CLIENT_URL
        self.company_name = settings.COMPANY_NAME

        if not self.template_dir.is_dir():
            raise TemplateRenderError(
                f"Template directory not found: {self.template_dir}"
            )

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["stars"] = star_rating

        logger.info(f"Template renderer initialized: {self.template_dir}")

    def render(self, event: NotificationEvent) -> RenderedEmail:
        """Render the template matching the event's type.

        Raises:
            TemplateRenderError: If the event type has no template.
        """
        if isinstance(event, JobApplicationEvent):
            return self.render_job_application(event)
        if isinstance(event, LeadEvent):
            return self.render_lead(event)
        if isinstance(event, ReviewEvent):
            return self.render_review(event)
        if isinstance(event, SystemAlertEvent):
            return self.render_system_alert(event)
        raise TemplateRenderError(f"No template for event type {type(event).__name__}")

    def render_job_application(self, event: JobApplicationEvent) -> RenderedEmail:
        """Render the job application email; position defaults when blank."""
        return RenderedEmail(
            subject=f"New Job Application: {event.full_name}",
            html=self._render_html(
                "job_application.html",
                event=event,
                heading="New Job Application Received",
                action_url=self._admin_url("job-applicants"),
                action_label="View Application",
            ),
        )

    def render_lead(self, event: LeadEvent) -> RenderedEmail:
        """Render the contact form lead email."""
        return RenderedEmail(
            subject=f"New Lead: {event.name} - {event.service}",
            html=self._render_html(
                "lead.html",
                event=event,
                heading="New Lead Received",
                action_url=self._admin_url("leads"),
                action_label="View Lead",
            ),
        )

    def render_review(self, event: ReviewEvent) -> RenderedEmail:
        """Render the review moderation email with the star rating."""
        return RenderedEmail(
            subject=f"New Review: {event.reviewer_name} - {event.company}",
            html=self._render_html(
                "review.html",
                event=event,
                heading="New Review Received",
                action_url=self._admin_url("reviews"),
                action_label="View Review",
            ),
        )

    def render_system_alert(self, event: SystemAlertEvent) -> RenderedEmail:
        """Render a system alert; header colors follow the severity."""
        header_gradient, accent_color = SEVERITY_STYLES[event.severity]
        return RenderedEmail(
            subject=f"System Alert: {event.title}",
            html=self._render_html(
                "system_alert.html",
                event=event,
                heading=event.title,
                header_gradient=header_gradient,
                accent_color=accent_color,
                action_url=self._admin_url(),
                action_label="Go to Admin Panel",
            ),
        )

    def _admin_url(self, section: str | None = None) -> str:
        base = f"{self.client_url}/admin"
        return f"{base}/{section}" if section else base

    def _render_html(self, template_name: str, **context: Any) -> str:
        """Render an HTML template with the shared footer context.

        Raises:
            TemplateRenderError: If template not found or rendering fails.
        """
        context.setdefault("company_name", self.company_name)

        try:
            logger.debug(f"Rendering HTML template: {template_name}")

            template = self.env.get_template(template_name)
            rendered = template.render(**context)

            logger.debug(f"HTML template rendered: {len(rendered)} bytes")
            return rendered

        except TemplateNotFound:
            logger.error(f"HTML template not found: {template_name}")
            raise TemplateRenderError(
                f"Template not found: {template_name}",
                template_name=template_name,
            ) from None

        except Exception as e:
            logger.error(f"Failed to render HTML template: {e}")
            raise TemplateRenderError(
                f"Failed to render {template_name}: {e}",
                template_name=template_name,
            ) from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template file exists in the template directory."""
        return (self.template_dir / template_name).exists()
