"""Unit tests for event, message and user models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from admin_notifications.models import (
    AdminUser,
    JobApplicationEvent,
    LeadEvent,
    OutboundMessage,
    ReviewEvent,
    SystemAlertEvent,
    UserRole,
    strip_tags,
)


class TestEvents:
    def test_camel_case_form_payload(self):
        event = JobApplicationEvent.model_validate({
            "fullName": "Ana",
            "email": "ana@z.com",
            "phone": "123",
            "experience": "1-3 years",
        })

        assert event.full_name == "Ana"
        assert event.position is None
        assert event.position_or_default == "General Position"

    def test_snake_case_names(self):
        event = ReviewEvent(reviewer_name="Sam", company="Acme", rating=4, category="IT")

        assert event.reviewer_name == "Sam"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            ReviewEvent(reviewer_name="Sam", company="Acme", rating=rating, category="IT")

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValidationError):
            SystemAlertEvent(title="Disk Low", message="90% full", severity="critical")

    def test_lead_phone_optional(self):
        lead = LeadEvent(name="Joe", email="joe@y.com", service="BPO", message="hi")

        assert lead.phone is None


class TestOutboundMessage:
    def test_text_fallback_strips_tags(self):
        html = "<html><body><p class=\"x\">Hello <b>Joe</b> &amp; co</p></body></html>"
        message = OutboundMessage(to=["a@x.com"], subject="Hi", html=html)

        assert message.text_body == "Hello Joe &amp; co"
        assert message.text_body == strip_tags(html)

    def test_explicit_text_wins(self):
        message = OutboundMessage(to=["a@x.com"], subject="Hi", html="<p>x</p>", text="plain")

        assert message.text_body == "plain"

    def test_recipients_header(self):
        message = OutboundMessage(to=["a@x.com", "b@x.com"], subject="Hi", html="")

        assert message.recipients_header == "a@x.com, b@x.com"

    def test_single_recipient_string(self):
        message = OutboundMessage(to="a@x.com", subject="Hi", html="")

        assert message.to == ["a@x.com"]

    def test_from_alias(self):
        message = OutboundMessage.model_validate(
            {"to": ["a@x.com"], "subject": "Hi", "html": "", "from": "ops@x.com"}
        )

        assert message.from_address == "ops@x.com"

    def test_empty_recipient_list_rejected(self):
        with pytest.raises(ValidationError):
            OutboundMessage(to=[], subject="Hi", html="")


class TestAdminUser:
    def test_directory_document(self):
        user = AdminUser.model_validate({
            "_id": "65f0c0ffee",
            "email": "a@x.com",
            "isActive": True,
            "role": "moderator",
            "preferences": {"notifications": {"email": True, "push": False}},
        })

        assert user.role is UserRole.MODERATOR
        assert user.is_notifiable
        assert user.email_notifications_enabled

    @pytest.mark.parametrize("preferences,expected", [
        (None, True),
        ({}, True),
        ({"notifications": {}}, True),
        ({"notifications": {"email": True}}, True),
        ({"notifications": {"email": False}}, False),
    ])
    def test_email_preference_is_default_allow(self, preferences, expected):
        document = {"email": "a@x.com", "isActive": True, "role": "admin"}
        if preferences is not None:
            document["preferences"] = preferences

        user = AdminUser.model_validate(document)

        assert user.email_notifications_enabled is expected

    @pytest.mark.parametrize("role,is_active,expected", [
        ("admin", True, True),
        ("moderator", True, True),
        ("viewer", True, False),
        ("admin", False, False),
    ])
    def test_is_notifiable(self, role, is_active, expected):
        user = AdminUser.model_validate(
            {"email": "a@x.com", "isActive": is_active, "role": role}
        )

        assert user.is_notifiable is expected
