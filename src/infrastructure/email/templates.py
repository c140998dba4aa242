"""Email bodies for invitation messages."""

import html

from infrastructure.email.sender import EmailMessage

_FOOTER_TEXT = "This is an automated email from Taskboard. Please do not reply to this email."


def _button(url: str, label: str) -> str:
    return (
        f'<a href="{html.escape(url)}" style="display:inline-block;padding:12px 24px;'
        'background-color:#4f46e5;color:#ffffff;text-decoration:none;border-radius:6px;'
        f'margin:8px 8px 8px 0">{html.escape(label)}</a>'
    )


def _wrap(title: str, inner: str) -> str:
    return (
        '<html><body style="font-family:Arial,sans-serif;line-height:1.6;color:#333;'
        'max-width:600px;margin:0 auto;padding:20px">'
        '<div style="background-color:#f9fafb;border-radius:8px;padding:30px;'
        'border:1px solid #e5e7eb">'
        f'<h1 style="margin-top:0;color:#4f46e5">{html.escape(title)}</h1>'
        f"{inner}"
        '<p style="margin-top:30px;padding-top:20px;border-top:1px solid #e5e7eb;'
        f'font-size:12px;color:#6b7280">{_FOOTER_TEXT}</p>'
        "</div></body></html>"
    )


def team_invitation_email(
    to: str,
    inviter_name: str,
    inviter_email: str,
    login_url: str,
    register_url: str,
    action: str,
) -> EmailMessage:
    """Build the team invitation email.

    ``action`` is ``"login"`` when the invitee already has an account and
    ``"register"`` otherwise; it only decides which link is offered first.
    """
    primary, secondary = (
        (("Log in to accept", login_url), ("Create an account", register_url))
        if action == "login"
        else (("Create an account", register_url), ("Log in to accept", login_url))
    )
    inviter = f"{inviter_name} ({inviter_email})" if inviter_email else inviter_name

    text_body = "\n".join(
        [
            "Hello,",
            "",
            f"{inviter} has invited you to join their team on Taskboard.",
            "",
            f"{primary[0]}: {primary[1]}",
            f"{secondary[0]}: {secondary[1]}",
            "",
            "This invitation expires in 7 days.",
            "",
            _FOOTER_TEXT,
        ]
    )
    html_body = _wrap(
        "Team Invitation",
        f"<p>Hello,</p><p><strong>{html.escape(inviter)}</strong> has invited you to join "
        "their team on Taskboard.</p>"
        f"<p>{_button(primary[1], primary[0])}{_button(secondary[1], secondary[0])}</p>"
        "<p>This invitation expires in 7 days.</p>",
    )
    return EmailMessage(
        to=to,
        subject=f"{inviter_name} invited you to join their team",
        text_body=text_body,
        html_body=html_body,
        from_name=inviter_name,
    )


def board_invitation_email(
    to: str,
    user_name: str,
    inviter_name: str,
    board_title: str,
    workspace_name: str | None,
    board_url: str,
) -> EmailMessage:
    """Build the email sent when a user is added to a board."""
    where = f' in the workspace "{workspace_name}"' if workspace_name else ""

    text_body = "\n".join(
        [
            f"Hello {user_name},",
            "",
            f'{inviter_name} has invited you to join the board "{board_title}"{where}.',
            "",
            "You can now view and work on tasks in this board.",
            f"Access the board at: {board_url}",
            "",
            _FOOTER_TEXT,
        ]
    )
    html_body = _wrap(
        "Board Invitation",
        f"<p>Hello {html.escape(user_name)},</p>"
        f"<p><strong>{html.escape(inviter_name)}</strong> has invited you to join the board "
        f"<strong>&quot;{html.escape(board_title)}&quot;</strong>{html.escape(where)}.</p>"
        "<p>You can now view and work on tasks in this board.</p>"
        f"<p>{_button(board_url, 'View Board')}</p>",
    )
    return EmailMessage(
        to=to,
        subject=f'You\'ve been invited to join "{board_title}" board',
        text_body=text_body,
        html_body=html_body,
        from_name=inviter_name,
    )
