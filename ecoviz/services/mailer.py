"""
EcoViz — Results Mailer
Renders a footprint summary as HTML and sends it over SMTP.
"""
import html
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from ecoviz.core.config import settings
from ecoviz.schemas.schemas import EmailResults
from ecoviz.utils.carbon import GLOBAL_AVERAGE_KG, US_AVERAGE_KG, compare_to_averages

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "Your EcoViz Carbon Footprint Results"


class MailerError(Exception):
    """Raised when a results email cannot be delivered."""


def _format_kg(value: float) -> str:
    return f"{value:,.2f} kg CO2e"


def render_results_email(results: EmailResults) -> str:
    """Render the fixed HTML summary for a calculation result."""
    ratios = compare_to_averages(results.carbon_footprint)

    breakdown_rows = ""
    if results.breakdown:
        for label, value in (
            ("Housing", results.breakdown.housing),
            ("Transportation", results.breakdown.transportation),
            ("Food", results.breakdown.food),
            ("Consumption", results.breakdown.consumption),
        ):
            breakdown_rows += (
                f'<tr><td style="padding:4px 12px;">{label}</td>'
                f'<td style="padding:4px 12px;text-align:right;">{_format_kg(value)}</td></tr>\n'
            )

    analysis_block = ""
    if results.ai_analysis:
        analysis = html.escape(results.ai_analysis).replace("\n", "<br>")
        analysis_block = f"""
    <h2 style="color:#2e7d32;">Personalised Recommendations</h2>
    <p>{analysis}</p>"""

    breakdown_block = ""
    if breakdown_rows:
        breakdown_block = f"""
    <h2 style="color:#2e7d32;">Breakdown by Category</h2>
    <table style="border-collapse:collapse;">
{breakdown_rows}    </table>"""

    return f"""<!DOCTYPE html>
<html>
  <body style="font-family:Arial,sans-serif;color:#333;">
    <h1 style="color:#1b5e20;">Your Carbon Footprint Results</h1>
    <p>Your estimated annual carbon footprint is <strong>{_format_kg(results.carbon_footprint)}</strong>.</p>
    <p>That is {ratios['global_ratio']}x the global average of {GLOBAL_AVERAGE_KG:,} kg
      and {ratios['us_ratio']}x the US average of {US_AVERAGE_KG:,} kg.</p>{breakdown_block}{analysis_block}
    <p style="font-size:12px;color:#777;">Sent by EcoViz &middot; <a href="{html.escape(settings.BRAND_URL)}">{html.escape(settings.BRAND_URL)}</a></p>
  </body>
</html>
"""


def _render_plain_text(results: EmailResults) -> str:
    lines = [f"Your estimated annual carbon footprint is {_format_kg(results.carbon_footprint)}."]
    if results.breakdown:
        lines.append("")
        for name, value in results.breakdown.model_dump().items():
            lines.append(f"{name.title()}: {_format_kg(value)}")
    if results.ai_analysis:
        lines.extend(["", results.ai_analysis])
    return "\n".join(lines)


class Mailer:
    """SMTP transport for result emails."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: Optional[bool] = None,
        from_address: Optional[str] = None,
    ):
        self.host = settings.SMTP_HOST if host is None else host
        self.port = settings.SMTP_PORT if port is None else port
        self.username = settings.SMTP_USERNAME if username is None else username
        self.password = settings.SMTP_PASSWORD if password is None else password
        self.use_tls = settings.SMTP_USE_TLS if use_tls is None else use_tls
        self.from_address = settings.EMAIL_FROM_ADDRESS if from_address is None else from_address

    def build_message(self, email: str, results: EmailResults) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = EMAIL_SUBJECT
        message["From"] = self.from_address
        message["To"] = email
        message.set_content(_render_plain_text(results))
        message.add_alternative(render_results_email(results), subtype="html")
        return message

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(message)

    async def send_results(self, email: str, results: EmailResults) -> None:
        if not self.host:
            raise MailerError("SMTP_HOST is not configured")

        message = self.build_message(email, results)
        try:
            await run_in_threadpool(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailerError(f"SMTP delivery to {email} failed: {e}") from e
        logger.info(f"Results email sent to {email}")
