"""
Servicio simple de envío de correos (SMTP) para el código de verificación.
"""
import logging
import smtplib
from html import escape
from email.message import EmailMessage

from hdnotes.core.config import settings
from hdnotes.core.exceptions import EmailDeliveryError
from hdnotes.domain.users import mask_email

_log = logging.getLogger("hdnotes.email")


def send_email(to_email: str, subject: str, html_body: str, text_body: str | None = None) -> None:
    if not settings.smtp_configured:
        raise EmailDeliveryError(detail="SMTP no configurado. Define EMAIL_USER/EMAIL_PASS en .env")

    msg = EmailMessage()
    msg["From"] = f"{settings.smtp_from_name} <{settings.smtp_from_email or settings.smtp_user}>"
    msg["To"] = to_email
    msg["Subject"] = subject
    if text_body:
        msg.set_content(text_body)
    msg.add_alternative(html_body, subtype="html")

    try:
        # Conexión TLS por defecto (587)
        if settings.smtp_use_tls:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
                server.starttls()
                server.login(settings.smtp_user, settings.smtp_pass)
                server.send_message(msg)
        else:
            with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port) as server:
                server.login(settings.smtp_user, settings.smtp_pass)
                server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        _log.error("Envío de correo a %s falló: %s", mask_email(to_email), e)
        raise EmailDeliveryError(detail=str(e)) from e


def render_verification_code_email(code: str, display_name: str, expires_in_minutes: int) -> tuple[str, str, str]:
    """Devuelve (subject, html, text) del correo con el código OTP."""
    subject = "HD Notes - Email Verification OTP"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <div style="background: #3b82f6; color: white; padding: 20px; text-align: center;">
        <h1>HD Notes</h1>
      </div>
      <div style="padding: 30px; background: #f8fafc;">
        <h2>Hello {escape(display_name)}!</h2>
        <p>Thank you for signing up with HD Notes. Please use the following OTP to verify your email address:</p>
        <div style="background: white; padding: 20px; text-align: center; margin: 20px 0; border-radius: 8px;">
          <h1 style="color: #3b82f6; font-size: 32px; margin: 0;">{code}</h1>
        </div>
        <p>This OTP will expire in {expires_in_minutes} minutes.</p>
        <p>If you didn't request this, please ignore this email.</p>
      </div>
    </div>
    """
    text = f"Hello {display_name}! Your HD Notes verification code is {code}. It expires in {expires_in_minutes} minutes."
    return subject, html, text


def send_verification_code_email(recipient: str, code: str, display_name: str) -> None:
    minutes = settings.otp_expire_minutes
    subject, html, text = render_verification_code_email(code, display_name, minutes)
    send_email(recipient, subject, html, text)
    _log.info("OTP enviado a %s", mask_email(recipient))
