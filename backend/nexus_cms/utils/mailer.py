import smtplib
from email.mime.text import MIMEText
from typing import Iterable

from flask import current_app


def send_email(recipients: Iterable[str], subject: str, body: str, html: bool = False) -> bool:
    """
    Best-effort SMTP send. Returns False (and logs) instead of raising.
    """
    config = current_app.config
    recipients = [r for r in recipients if r]
    host = config.get("MAIL_SERVER")

    if not host or not recipients:
        current_app.logger.info(f"Mail not sent ({subject}): mail disabled or no recipients")
        return False

    try:
        msg = MIMEText(body, "html" if html else "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = config["MAIL_FROM"]
        msg["To"] = ", ".join(recipients)

        with smtplib.SMTP(host, config["MAIL_PORT"], timeout=10) as s:
            if config.get("MAIL_USE_TLS"):
                s.starttls()
            if config.get("MAIL_USERNAME"):
                s.login(config["MAIL_USERNAME"], config.get("MAIL_PASSWORD") or "")
            s.sendmail(config["MAIL_FROM"], recipients, msg.as_string())
        return True
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error(f"Failed to send mail '{subject}' to {recipients}: {e}")
        return False
