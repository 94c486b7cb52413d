"""Message bodies for authentication emails."""

from .email_sender import EmailMessage


def two_factor_code_message(to: str, code: str, ttl_minutes: int) -> EmailMessage:
    return EmailMessage(
        to=to,
        subject="Your Two-Factor Authentication Code",
        text=(
            f"Your verification code is: {code}\n\n"
            f"This code will expire in {ttl_minutes} minutes."
        ),
        html=(
            "<div>"
            "<h2>Your Two-Factor Authentication Code</h2>"
            f"<p>Your verification code is: <strong>{code}</strong></p>"
            f"<p>This code will expire in {ttl_minutes} minutes.</p>"
            "<p>If you did not request this code, please ignore this email.</p>"
            "</div>"
        ),
    )


def password_reset_message(to: str, reset_link: str, ttl_hours: int) -> EmailMessage:
    return EmailMessage(
        to=to,
        subject="Reset your password",
        text=(
            "A password reset was requested for your account.\n\n"
            f"Open this link to choose a new password: {reset_link}\n\n"
            f"The link expires in {ttl_hours} hour(s). "
            "If you did not request a reset, you can ignore this email."
        ),
        html=(
            "<div>"
            "<h2>Reset your password</h2>"
            "<p>A password reset was requested for your account.</p>"
            f'<p><a href="{reset_link}">Choose a new password</a></p>'
            f"<p>The link expires in {ttl_hours} hour(s). "
            "If you did not request a reset, you can ignore this email.</p>"
            "</div>"
        ),
    )
