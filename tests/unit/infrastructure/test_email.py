"""Unit tests for email rendering and delivery."""

import smtplib
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.config import Settings
from infrastructure.email.sender import EmailMessage, SMTPEmailSender, deliver
from infrastructure.email.templates import board_invitation_email, team_invitation_email


def _message() -> EmailMessage:
    return EmailMessage(to="bob@example.com", subject="Hi", text_body="Hi", html_body="<p>Hi</p>")


def _settings(**overrides) -> Settings:
    values = {
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": "secret",
        "smtp_from": "noreply@example.com",
    }
    values.update(overrides)
    return Settings(**values)


class TestTemplates:
    def test_register_link_first_for_new_users(self):
        msg = team_invitation_email(
            to="new@example.com",
            inviter_name="Alice",
            inviter_email="alice@example.com",
            login_url="https://app/login?t=1",
            register_url="https://app/register?t=1",
            action="register",
        )

        body = msg.text_body
        assert body.index("https://app/register?t=1") < body.index("https://app/login?t=1")
        assert "Alice (alice@example.com)" in body
        assert msg.from_name == "Alice"

    def test_login_link_first_for_existing_users(self):
        msg = team_invitation_email(
            to="bob@example.com",
            inviter_name="Alice",
            inviter_email="",
            login_url="https://app/login?t=1",
            register_url="https://app/register?t=1",
            action="login",
        )

        body = msg.text_body
        assert body.index("https://app/login?t=1") < body.index("https://app/register?t=1")

    def test_html_is_escaped(self):
        msg = board_invitation_email(
            to="bob@example.com",
            user_name="<Bob>",
            inviter_name="Alice & Co",
            board_title="<script>",
            workspace_name=None,
            board_url="https://app/board/1?a=1&b=2",
        )

        assert "<script>" not in msg.html_body
        assert "&lt;Bob&gt;" in msg.html_body
        assert "a=1&amp;b=2" in msg.html_body
        assert "workspace" not in msg.text_body
        assert msg.subject == 'You\'ve been invited to join "<script>" board'


class TestSMTPEmailSender:
    @pytest.mark.asyncio
    async def test_unconfigured_host_reports_failure(self):
        sender = SMTPEmailSender(_settings(smtp_host=""))

        assert sender.is_configured is False
        assert await sender.send(_message()) is False

    @pytest.mark.asyncio
    async def test_sends_through_smtp(self):
        sender = SMTPEmailSender(_settings())
        server = MagicMock()

        with patch("infrastructure.email.sender.smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value = server
            assert await sender.send(_message()) is True

        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        args = server.sendmail.call_args.args
        assert args[0] == "noreply@example.com"
        assert args[1] == ["bob@example.com"]

    @pytest.mark.asyncio
    async def test_smtp_error_reports_failure(self):
        sender = SMTPEmailSender(_settings())

        with patch("infrastructure.email.sender.smtplib.SMTP") as smtp:
            smtp.side_effect = smtplib.SMTPConnectError(421, b"busy")
            assert await sender.send(_message()) is False


class TestDeliver:
    @pytest.mark.asyncio
    async def test_swallows_sender_exceptions(self):
        sender = AsyncMock()
        sender.send.side_effect = RuntimeError("boom")

        assert await deliver(sender, _message()) is False

    @pytest.mark.asyncio
    async def test_passes_through_result(self):
        sender = AsyncMock()
        sender.send.return_value = True

        assert await deliver(sender, _message()) is True
