"""
Results Email Service
legal_value_score/services/email_service.py

Sends the "immediate results" report for a stored assessment through the
SendGrid v3 mail/send REST endpoint.

Without SENDGRID_API_KEY the send is skipped and reported, not raised.
"""

import html
import logging
from typing import Any, Dict, List, Optional

import httpx

from legal_value_score.core.exceptions import (
    EmailDeliveryException,
    MissingEmailAddressException,
    ScoringConfigurationError,
    UnknownTierError,
)
from legal_value_score.models.enumerations import AnalyticsEventType
from legal_value_score.scoring.tiers import get_tier_metadata
from legal_value_score.scoring.utils import CATEGORY_SCALE, format_currency
from legal_value_score.scoring.variants import ScoringVariant, get_variant
from legal_value_score.services.assessment_service import AssessmentService

logger = logging.getLogger(__name__)

_STYLE = """
  body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
  .container { max-width: 600px; margin: 0 auto; padding: 20px; }
  .header { background: linear-gradient(to right, #2563eb, #4f46e5); color: white; padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }
  .score { font-size: 48px; font-weight: bold; margin: 20px 0; }
  .content { background: #f9fafb; padding: 30px; }
  .tier { display: inline-block; padding: 10px 20px; border-radius: 20px; font-weight: bold; margin: 20px 0; }
  .category { margin: 15px 0; padding: 15px; background: white; border-radius: 8px; }
  .value { font-size: 28px; font-weight: bold; color: #2563eb; }
  .cta { background: #2563eb; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; display: inline-block; margin: 20px 0; }
"""


class EmailService:
    """Render and deliver the results email for an assessment."""

    def __init__(
        self,
        assessments: AssessmentService,
        api_key: Optional[str],
        from_email: str,
        app_url: str,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        timeout: float = 15.0,
        currency_symbol: str = "€",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.assessments = assessments
        self.api_key = api_key
        self.from_email = from_email
        self.app_url = app_url.rstrip("/")
        self.api_url = api_url
        self.timeout = timeout
        self.currency_symbol = currency_symbol
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def send_results(self, assessment_id: str) -> Dict[str, Any]:
        """
        Send the results email and mark the assessment as emailed.

        Returns:
            {"success": True} or {"success": False, "message": ...} when not configured

        Raises:
            EntityNotFoundException: unknown assessment
            MissingEmailAddressException: the assessment has no email
            EmailDeliveryException: SendGrid rejected or could not be reached
            RepositoryException: the sent flag could not be stored
        """
        record = self.assessments.get_assessment(assessment_id)

        email = (record.get("email") or "").strip()
        if not email:
            raise MissingEmailAddressException(assessment_id)

        if not self.configured:
            logger.info("SendGrid not configured, skipping email send")
            return {"success": False, "message": "Email service not configured"}

        variant = self._variant_for(record)
        subject = f"Your {variant.title}: {record.get('total_score')}/100"
        self._deliver(email, subject, self.render_html(record, variant))
        logger.info(f"Results email sent for assessment {assessment_id}")

        self.assessments.mark_email_sent(assessment_id)
        self.assessments.track(
            AnalyticsEventType.REPORT_EMAIL_SENT,
            assessment_id,
            {"variant": variant.name, "tier": record.get("tier")},
        )
        return {"success": True}

    def _variant_for(self, record: Dict[str, Any]) -> ScoringVariant:
        name = record.get("variant")
        if not name:
            return self.assessments.variant
        try:
            return get_variant(name)
        except ScoringConfigurationError:
            logger.warning(f"Assessment {record.get('id')} has unknown variant '{name}'")
            return self.assessments.variant

    def _deliver(self, to_email: str, subject: str, html_body: str) -> None:
        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [{"type": "text/html", "value": html_body}],
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryException(
                f"SendGrid returned {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryException(f"SendGrid request failed: {e}") from e

    def render_html(self, record: Dict[str, Any], variant: ScoringVariant) -> str:
        tier = record.get("tier") or ""
        try:
            tier_title = get_tier_metadata(tier).title
        except UnknownTierError:
            tier_title = tier.upper()

        greeting = ""
        if record.get("first_name"):
            greeting = f"<p>Hi {html.escape(record['first_name'])},</p>"

        categories: List[str] = []
        for category in variant.categories:
            label = html.escape(variant.category_labels.get(category, category))
            categories.append(
                f'<div class="category"><strong>{label}:</strong> '
                f"{record.get(f'{category}_score', 0)}/{CATEGORY_SCALE}</div>"
            )

        value_section = ""
        if variant.is_monetized and record.get("value_potential_total") is not None:
            rows = []
            for category, table in variant.value_buckets.items():
                amount = record.get(f"value_potential_{table.key}")
                if amount is None:
                    continue
                label = html.escape(variant.category_labels.get(category, category))
                rows.append(
                    f'<div class="category"><strong>{label}:</strong> '
                    f"{format_currency(int(amount), self.currency_symbol)}</div>"
                )
            total = format_currency(int(record["value_potential_total"]), self.currency_symbol)
            value_section = (
                "<h2>Your Value Potential</h2>"
                f'<div class="value">{total}</div>'
                + "".join(rows)
            )

        results_url = f"{self.app_url}/results/{html.escape(str(record.get('id', '')))}"
        title = html.escape(variant.title)

        return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Your {title}</title>
    <style>{_STYLE}</style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>Your {title}</h1>
        <div class="score">{record.get('total_score')}/100</div>
      </div>
      <div class="content">
        {greeting}
        <div class="tier">{html.escape(tier_title)}</div>
        <h2>Score Breakdown</h2>
        <div class="breakdown">{''.join(categories)}</div>
        {value_section}
        <p>Thank you for completing the LineaBlu {title} assessment.</p>
        <a href="{results_url}" class="cta">View Detailed Report</a>
      </div>
    </div>
  </body>
</html>
"""
