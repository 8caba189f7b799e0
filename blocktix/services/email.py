import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from datetime import datetime
from typing import Optional
import logging

from blocktix.config import Settings
from blocktix.errors import ConfigurationError

logger = logging.getLogger(__name__)


class EmailService:
    @staticmethod
    def _build_message(settings: Settings, to_email: str, subject: str, html_content: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = settings.smtp_from
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(html_content, "html"))
        return message

    @staticmethod
    async def _deliver(settings: Settings, message: MIMEMultipart) -> None:
        # Port 465 speaks implicit TLS; anything else upgrades with STARTTLS
        implicit_tls = settings.smtp_port == 465
        await aiosmtplib.send(
            message,
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=implicit_tls,
            start_tls=not implicit_tls
        )

    @staticmethod
    async def send_email(settings: Settings, to_email: str, subject: str, html_content: str) -> bool:
        """Send an email using SMTP."""
        if not settings.email_configured:
            logger.warning("SMTP not configured, skipping email send")
            return False

        message = EmailService._build_message(settings, to_email, subject, html_content)
        try:
            await EmailService._deliver(settings, message)
            return True
        except Exception as e:
            logger.error(f"Failed to send email: {e}")
            return False

    @staticmethod
    async def send_ticket_receipt(
        settings: Settings,
        to_email: str,
        title: str,
        starts_at: Optional[datetime],
        location: Optional[str],
        quantity: int,
        category_name: Optional[str],
        order_id: str,
        total_amount: float
    ) -> bool:
        """Send the ticket receipt for a completed purchase."""
        when = starts_at.strftime("%d %b %Y, %H:%M") if starts_at else "TBA"
        category_line = f"<li><strong>Category:</strong> {category_name}</li>" if category_name else ""

        html_content = f"""
        <html>
        <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2>Your BlockTix Ticket</h2>
            <p>Thank you for your purchase. Here are your ticket details:</p>
            <ul>
                <li><strong>Event:</strong> {title}</li>
                <li><strong>Date &amp; Time:</strong> {when}</li>
                <li><strong>Location:</strong> {location or "TBA"}</li>
                <li><strong>Quantity:</strong> {quantity}</li>
                {category_line}
                <li><strong>Order ID:</strong> {order_id}</li>
                <li><strong>Total Paid:</strong> ₹{total_amount:.2f}</li>
            </ul>
            <p>Show this email at the venue along with your ID if required. Enjoy the event!</p>
        </body>
        </html>
        """

        return await EmailService.send_email(settings, to_email, f"Your Ticket: {title}", html_content)

    @staticmethod
    async def send_otp_email(settings: Settings, to_email: str, code: str, ttl_seconds: int) -> None:
        """Send a one-time code. Unlike receipts, delivery failures propagate."""
        if not settings.email_configured:
            raise ConfigurationError("Email not configured on server")

        html_content = f"""
        <html>
        <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2>Your BlockTix Verification Code</h2>
            <p>Use the following One-Time Password (OTP) to verify your email address:</p>
            <p style="font-size: 24px; font-weight: bold; letter-spacing: 4px;">{code}</p>
            <p>This code is valid for {ttl_seconds // 60} minutes. If you did not request this, you can ignore this email.</p>
        </body>
        </html>
        """

        message = EmailService._build_message(settings, to_email, "Your BlockTix OTP Code", html_content)
        await EmailService._deliver(settings, message)
