"""
PDF Generation Service.
Creates advertising invoice PDFs using ReportLab.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from solobill.core.config import settings
from solobill.models.base import new_id
from solobill.models.currency import Currency
from solobill.models.invoice import Invoice
from solobill.schemas.invoice import ExportOptions
from solobill.services.calculator import AD_MARGIN, compute_breakdown
from solobill.services.currency import format_amount, resolve_rate


class PDFService:
    """Service for generating invoice PDFs."""

    def __init__(self, storage_path: str | Path | None = None):
        self.storage_path = Path(storage_path or settings.PDF_STORAGE_PATH)
        self.storage_path.mkdir(parents=True, exist_ok=True)

        # Colors
        self.primary_color = colors.HexColor("#4F46E5")  # Indigo
        self.gray_color = colors.HexColor("#64748B")
        self.light_gray = colors.HexColor("#F1F5F9")
        self.border_color = colors.HexColor("#E2E8F0")

    def _get_styles(self):
        """Get custom paragraph styles."""
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='InvoiceTitle',
            parent=styles['Heading1'],
            fontSize=24,
            textColor=self.primary_color,
            alignment=TA_RIGHT,
        ))

        styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=styles['Heading2'],
            fontSize=11,
            textColor=self.gray_color,
            spaceBefore=4*mm,
            spaceAfter=2*mm,
        ))

        styles.add(ParagraphStyle(
            name='NormalText',
            parent=styles['Normal'],
            fontSize=10,
        ))

        styles.add(ParagraphStyle(
            name='SmallText',
            parent=styles['Normal'],
            fontSize=8,
            textColor=self.gray_color,
        ))

        styles.add(ParagraphStyle(
            name='RightAlign',
            parent=styles['Normal'],
            fontSize=10,
            alignment=TA_RIGHT,
        ))

        return styles

    def _format_date(self, d: date) -> str:
        """Format date as 'Mar 1, 2024'."""
        return f"{d.strftime('%b')} {d.day}, {d.year}"

    def _summary_rows(self, invoice: Invoice, options: ExportOptions, money) -> list[list[str]]:
        totals = compute_breakdown(
            invoice.items,
            invoice.tax_rate,
            include_margin=options.show_margin,
            include_tax=options.show_tax,
        )

        rows = [
            ["Ad Spend (pass-through)", money(totals.ad_spend_base)],
            ["Service Fees", money(totals.service_fees)],
        ]
        if options.show_margin:
            rows.append([f"Management Margin ({AD_MARGIN * 100:.0f}%)", money(totals.margin_earned)])
        rows.append(["Subtotal", money(totals.subtotal)])
        if options.show_tax:
            rows.append([f"Tax ({invoice.tax_rate}%)", money(totals.tax)])
        rows.append(["Total Due", money(totals.total)])
        return rows

    async def generate_invoice_pdf(
        self,
        invoice: Invoice,
        currency: Currency | None = None,
        options: ExportOptions | None = None,
    ) -> str:
        """
        Generate PDF for an invoice.

        Args:
            invoice: Invoice to export
            currency: Display currency (client's preferred by default)
            options: Sections to include

        Returns:
            Path to generated PDF file
        """
        options = options or ExportOptions()
        currency = currency or invoice.client.preferred_currency
        rate = resolve_rate(currency, invoice.client)
        styles = self._get_styles()

        def money(amount_usd: Decimal) -> str:
            return format_amount(amount_usd * rate, currency)

        # Unique path per export
        filename = f"invoice_{invoice.invoice_number.replace('/', '-')}_{currency.value}_{new_id()}.pdf"
        filepath = self.storage_path / filename

        doc = SimpleDocTemplate(
            str(filepath),
            pagesize=A4,
            rightMargin=20*mm,
            leftMargin=20*mm,
            topMargin=20*mm,
            bottomMargin=20*mm,
        )

        elements = []

        # ===== HEADER =====
        header_data = [
            [
                Paragraph(f"<b>{escape(settings.BUSINESS_NAME)}</b>", styles['NormalText']),
                Paragraph("<b>INVOICE</b>", styles['InvoiceTitle']),
            ],
            [
                Paragraph(escape(settings.SENDER_NAME), styles['SmallText']),
                Paragraph(f"No. {escape(invoice.invoice_number)}", styles['RightAlign']),
            ],
            [
                Paragraph(f"Status: {invoice.status.value}", styles['SmallText']),
                Paragraph(f"Date: {self._format_date(invoice.issue_date)}", styles['RightAlign']),
            ],
            [
                Paragraph("", styles['SmallText']),
                Paragraph(f"Due: {self._format_date(invoice.due_date)}", styles['RightAlign']),
            ],
        ]
        header_table = Table(header_data, colWidths=[95*mm, 75*mm])
        header_table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ]))
        elements.append(header_table)
        elements.append(Spacer(1, 10*mm))

        # ===== CLIENT INFO =====
        client = invoice.client
        elements.append(Paragraph("BILL TO", styles['SectionHeader']))
        client_info = (
            f"<b>{escape(client.name)}</b><br/>"
            f"{escape(client.address)}<br/>"
            f"{escape(client.email)}"
        )
        elements.append(Paragraph(client_info, styles['NormalText']))
        elements.append(Spacer(1, 8*mm))

        # ===== LINE ITEMS =====
        items_data = [["Description", "Type", "Qty", "Rate", "Amount"]]
        for item in invoice.items:
            items_data.append([
                Paragraph(escape(item.description), styles['NormalText']),
                "Ad Spend" if item.is_ad_spend else "Service",
                f"{item.quantity}",
                money(item.price),
                money(item.line_total),
            ])

        items_table = Table(
            items_data,
            colWidths=[70*mm, 22*mm, 15*mm, 30*mm, 33*mm],
            repeatRows=1,
        )
        items_table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), self.primary_color),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('TOPPADDING', (0, 0), (-1, -1), 3*mm),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 3*mm),
            ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('LINEBELOW', (0, 1), (-1, -1), 0.5, self.border_color),
            *[('BACKGROUND', (0, i), (-1, i), self.light_gray)
              for i in range(2, len(items_data), 2)],
        ]))
        elements.append(items_table)
        elements.append(Spacer(1, 6*mm))

        # ===== SUMMARY =====
        if options.show_summary:
            totals_table = Table(
                self._summary_rows(invoice, options, money),
                colWidths=[130*mm, 40*mm],
            )
            totals_table.setStyle(TableStyle([
                ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
                ('FONTSIZE', (0, 0), (-1, -1), 10),
                ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
                ('LINEABOVE', (0, -1), (-1, -1), 1, self.primary_color),
                ('BACKGROUND', (0, -1), (-1, -1), self.light_gray),
            ]))
            elements.append(totals_table)
            elements.append(Spacer(1, 10*mm))

        # ===== NOTES =====
        if options.show_notes and invoice.notes:
            elements.append(Paragraph("NOTES", styles['SectionHeader']))
            elements.append(Paragraph(escape(invoice.notes), styles['NormalText']))

        if currency != Currency.USD:
            elements.append(Spacer(1, 6*mm))
            elements.append(Paragraph(
                f"Amounts shown in {currency.value} at {rate} {currency.value} per USD.",
                styles['SmallText'],
            ))

        doc.build(elements)

        return str(filepath)
