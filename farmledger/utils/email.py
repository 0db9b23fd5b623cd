import logging

from flask import current_app, url_for
from flask_mail import Message

log = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, body: str) -> bool:
    """
    Send email using Flask-Mail configuration.
    Returns False (and logs) when mail is not configured or sending fails.
    """
    mail = current_app.extensions.get("mail")
    if mail is None:
        log.warning("[EMAIL - NOT CONFIGURED] To: %s | Subject: %s", to_email, subject)
        return False

    msg = Message(
        subject=subject,
        recipients=[to_email],
        body=body,
        sender=current_app.config.get("MAIL_DEFAULT_SENDER"),
    )
    try:
        mail.send(msg)
    except Exception as e:
        log.error("[EMAIL - ERROR] Failed to send to %s: %s", to_email, e)
        return False
    log.info("[EMAIL - SENT] To: %s | Subject: %s", to_email, subject)
    return True


def confirmation_url(token: str) -> str:
    base = current_app.config["FRONTEND_BASE_URL"].rstrip("/")
    return base + url_for("auth.callback", token=token)


def send_confirmation_email(user) -> bool:
    link = confirmation_url(user.email_verification_token)
    body = (
        "Welcome to farmledger.\n\n"
        f"Confirm your account by opening this link:\n{link}\n\n"
        "If you did not sign up, you can ignore this message."
    )
    return send_email(user.email, "Confirm your account", body)
