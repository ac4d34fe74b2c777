"""
Email Service.
Prepares invoice emails as mailto links for the user's own mail client.
"""

from urllib.parse import quote

from solobill.core.config import settings
from solobill.models.currency import Currency
from solobill.models.invoice import Invoice
from solobill.services.calculator import compute_breakdown
from solobill.services.currency import convert_and_format


class EmailService:
    """Service for preparing invoice emails."""

    def __init__(self):
        self.business_name = settings.BUSINESS_NAME
        self.sender_name = settings.SENDER_NAME

    def compose_invoice_email(
        self,
        invoice: Invoice,
        currency: Currency | None = None,
        include_margin: bool = True,
        include_tax: bool = True,
    ) -> dict[str, str]:
        """
        Build the subject and body of the email sending an invoice.

        Args:
            invoice: Invoice to send
            currency: Currency for the amount due (client's preferred by default)
            include_margin: Include the ad-spend margin in the amount due
            include_tax: Include tax in the amount due

        Returns:
            Recipient, subject, body and the matching mailto link
        """
        currency = currency or invoice.client.preferred_currency
        totals = compute_breakdown(
            invoice.items,
            invoice.tax_rate,
            include_margin=include_margin,
            include_tax=include_tax,
        )
        amount_due = convert_and_format(totals.total, currency, invoice.client)

        subject = f"Invoice {invoice.invoice_number} from {self.business_name}"
        body = (
            f"Hi {invoice.client.name},\n\n"
            f"Please find the attached invoice ({invoice.invoice_number}) for advertising services.\n\n"
            f"Total Amount Due: {amount_due}\n"
            f"Due Date: {invoice.due_date.isoformat()}\n\n"
            f"Thank you for your business!\n\n"
            f"Best regards,\n"
            f"{self.sender_name}"
        )

        return {
            "to": invoice.client.email,
            "subject": subject,
            "body": body,
            "mailto": self.mailto_link(invoice.client.email, subject, body),
        }

    @staticmethod
    def mailto_link(to_email: str, subject: str, body: str) -> str:
        """Encode a mailto: URL."""
        return f"mailto:{to_email}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
