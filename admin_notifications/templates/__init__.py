"""Templates module for the admin notification service.

Contains the Jinja2 renderer and the HTML templates (``html/``) for each
notification event kind.
"""

from admin_notifications.templates.renderer import TemplateRenderer, star_rating

__all__ = ["TemplateRenderer", "star_rating"]
