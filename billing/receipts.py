"""PDF receipts for stored bills."""

import io
import logging
import traceback
from typing import Dict, Optional

from django.conf import settings
from django.utils import timezone
from django.utils.html import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .calculator import format_currency
from .catalog import CATEGORIES
from .models import Bill

logger = logging.getLogger(__name__)

DEFAULT_SHOP = {
    "NAME": "MODERN BILLING SYSTEM",
    "GST_NUMBER": "22AAAAA0000A1Z5",
    "CONTACT": "+91 9876543210",
}

CATEGORY_LABELS = {
    "snacks": "Snacks",
    "grocery": "Grocery",
    "hygiene": "Beauty & Hygiene",
}


class ReceiptError(Exception):
    pass


def _shop_details(shop: Optional[Dict]) -> Dict:
    configured = getattr(settings, "BILLING", {}).get("SHOP", {})
    return {**DEFAULT_SHOP, **configured, **(shop or {})}


def render_receipt_pdf(bill: Bill, shop: Optional[Dict] = None) -> bytes:
    """Render a bill as an A4 PDF receipt and return the PDF bytes."""
    items = bill.item_list
    if not items:
        raise ReceiptError(f"Bill {bill.bill_number} has no items")

    shop = _shop_details(shop)
    symbol = getattr(settings, "BILLING", {}).get("CURRENCY_SYMBOL", "₹")

    try:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=30, leftMargin=30, topMargin=24, bottomMargin=18)
        styles = getSampleStyleSheet()
        story = []

        story.append(Paragraph(f"<b>{escape(shop['NAME'])}</b>", styles["Title"]))
        story.append(Paragraph(f"<b>GST No:</b> {shop['GST_NUMBER']}", styles["Normal"]))
        story.append(Paragraph(f"Contact: {shop['CONTACT']}", styles["Normal"]))
        story.append(Spacer(1, 8))

        created = timezone.localtime(bill.created_at) if timezone.is_aware(bill.created_at) else bill.created_at
        story.append(Paragraph(f"<b>Bill No:</b> {bill.bill_number}", styles["Normal"]))
        story.append(Paragraph(f"<b>Date:</b> {created.strftime('%d-%m-%Y %I:%M:%S %p')}", styles["Normal"]))
        story.append(Paragraph(f"<b>Customer:</b> {escape(bill.customer_name or 'N/A')}", styles["Normal"]))
        story.append(Paragraph(f"<b>Phone:</b> {escape(bill.customer_phone or 'N/A')}", styles["Normal"]))
        story.append(Spacer(1, 8))

        data = [["Item", "Qty", "Rate", "Amount"]]
        for item in items:
            data.append([
                item["name"],
                str(item["quantity"]),
                f"{float(item['price']):.2f}",
                format_currency(float(item["total"]), symbol),
            ])

        totals = bill.category_totals()
        taxes = bill.category_taxes()
        for category in CATEGORIES:
            if totals[category] > 0:
                label = CATEGORY_LABELS[category]
                data.append(["", "", f"{label} Total", format_currency(totals[category], symbol)])
                data.append(["", "", f"{label} Tax", format_currency(taxes[category], symbol)])
        data.append(["", "", "Grand Total", format_currency(bill.grand_total, symbol)])

        col_widths = [85 * mm, 20 * mm, 40 * mm, 35 * mm]
        table = Table(data, colWidths=col_widths, hAlign="LEFT")
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#222")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("ALIGN", (1, 1), (-1, -1), "CENTER"),
            ("GRID", (0, 0), (-1, len(items)), 0.4, colors.grey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ]))
        story.append(table)
        story.append(Spacer(1, 12))

        story.append(Paragraph("<b>Thank you for shopping!</b>", styles["Normal"]))
        story.append(Spacer(1, 20))

        sig_style = ParagraphStyle(name="sig", alignment=2, fontSize=10)
        story.append(Paragraph("Authorized Signature", sig_style))

        doc.build(story)
    except Exception as e:
        logger.error(f"Receipt rendering failed: {traceback.format_exc()}")
        raise ReceiptError(f"Failed to generate receipt: {str(e)}")

    logger.info(f"Receipt generated for {bill.bill_number}")
    return buf.getvalue()
