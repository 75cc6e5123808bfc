"""Email service for sending signup verification codes."""
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout

from flask import current_app, render_template_string
from flask_mail import Mail, Message

from campusvote.errors import MailDeliveryError


# HTML email template for OTP codes
OTP_EMAIL_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="margin: 0; padding: 0; font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; background-color: #f5f7fa;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background: #0f3460; border-radius: 16px 16px 0 0; padding: 30px; text-align: center;">
            <h1 style="color: white; margin: 0; font-size: 24px;">Campus Vote</h1>
            <p style="color: rgba(255,255,255,0.8); margin: 10px 0 0 0; font-size: 14px;">Verify your email</p>
        </div>

        <div style="background: white; padding: 30px; border-radius: 0 0 16px 16px; box-shadow: 0 4px 20px rgba(0,0,0,0.1);">
            <p style="color: #64748b; text-align: center; margin: 0 0 25px 0;">
                Use this code to finish creating your account.
            </p>

            <code style="background: #fef9c3; padding: 12px 16px; border-radius: 6px; font-family: 'Courier New', monospace; font-size: 28px; font-weight: 600; color: #713f12; display: block; text-align: center; letter-spacing: 6px;">
                {{ code }}
            </code>

            <p style="color: #991b1b; font-size: 12px; margin: 20px 0 0 0; text-align: center;">
                The code expires in {{ minutes }} minutes. If you did not request it, ignore this email.
            </p>
        </div>
    </div>
</body>
</html>
"""


class Mailer:
    """Flask-Mail wrapper that bounds how long a send may take.

    smtplib has no per-call timeout through Flask-Mail, so each send runs on
    a small worker pool and the caller waits at most MAIL_TIMEOUT_SECONDS.

    A send that has already started cannot be cancelled. A hung SMTP call
    keeps its worker busy until the socket gives up, and sends queued behind
    it may time out as well. Size MAIL_WORKERS for the expected SMTP latency.
    """

    def __init__(self, app=None):
        self.mail = Mail()
        self._executor = None
        self.timeout_seconds = 10
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.mail.init_app(app)
        self.timeout_seconds = app.config.get('MAIL_TIMEOUT_SECONDS', 10)
        self._executor = ThreadPoolExecutor(max_workers=app.config.get('MAIL_WORKERS', 2),
                                            thread_name_prefix='mailer')

    def is_enabled(self) -> bool:
        """Check if email service is enabled and configured."""
        return current_app.config.get('MAIL_ENABLED', False)

    def send(self, msg: Message):
        """Send a message, raising MailDeliveryError on failure or timeout."""
        if not self.is_enabled():
            current_app.logger.error("Email requested but MAIL_ENABLED is off")
            raise MailDeliveryError("Email service is not configured. Please contact the administrator.")

        if self._executor is None:
            raise MailDeliveryError()

        app = current_app._get_current_object()
        future = self._executor.submit(self._send_in_context, app, msg)
        try:
            future.result(timeout=self.timeout_seconds)
        except FutureTimeout:
            # Only drops the send if it is still queued
            future.cancel()
            current_app.logger.error(f"Email delivery timed out after {self.timeout_seconds}s")
            raise MailDeliveryError()
        except Exception as e:
            current_app.logger.error(f"Failed to send email: {str(e)}")
            raise MailDeliveryError() from e

    def _send_in_context(self, app, msg: Message):
        with app.app_context():
            self.mail.send(msg)

    def shutdown(self):
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


def send_otp_email(mailer: Mailer, to_email: str, code: str, ttl_seconds: int = 300):
    """Send a signup verification code.

    Raises MailDeliveryError if the message could not be delivered.
    """
    minutes = max(1, ttl_seconds // 60)
    html_body = render_template_string(OTP_EMAIL_TEMPLATE, code=code, minutes=minutes)

    msg = Message(
        subject="Your Campus Vote verification code",
        recipients=[to_email],
        body=f"Your verification code is {code}. It expires in {minutes} minutes.",
        html=html_body,
        sender=current_app.config.get('MAIL_DEFAULT_SENDER')
    )
    mailer.send(msg)
