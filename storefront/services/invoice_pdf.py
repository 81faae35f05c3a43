from __future__ import annotations

import os
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from storefront.config import settings
from storefront.constants import STATUS_PENDING
from storefront.models import Order
from storefront.services.pricing import order_totals
from storefront.utils.formatters import format_date, money


def generate_invoice_pdf(order: Order, path: Optional[str] = None) -> str:
    if path is None:
        os.makedirs(settings.export_dir, exist_ok=True)
        path = os.path.join(settings.export_dir, f"invoice_{order.display_id}.pdf")

    totals = order_totals(order.items)

    c = canvas.Canvas(path, pagesize=A4)
    w, h = A4

    y = h - 50
    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, y, settings.store_name)
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(550, y, "INVOICE")
    y -= 16
    c.setFont("Helvetica", 10)
    c.drawString(40, y, settings.store_email)
    c.drawRightString(550, y, f"Order ID: {order.display_id}")
    y -= 14
    c.drawRightString(550, y, f"Date: {format_date(order.created_at)}")
    y -= 14
    c.drawRightString(550, y, f"Status: {order.status or STATUS_PENDING}")
    y -= 28

    # bill to / ship to
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "BILL TO")
    c.drawString(310, y, "SHIP TO")
    y -= 14
    c.setFont("Helvetica", 10)
    c.drawString(40, y, (order.customer_name or "Guest")[:45])
    c.drawString(310, y, (order.shipping_address or "Not provided")[:45])
    y -= 14
    c.drawString(40, y, (order.customer_email or "Not provided")[:45])
    if order.note:
        c.drawString(310, y, f"Note: {order.note}"[:45])
    y -= 14
    if order.customer_phone:
        c.drawString(40, y, order.customer_phone[:45])
        y -= 14
    y -= 16

    # header
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "Item")
    c.drawString(330, y, "Qty")
    c.drawRightString(450, y, "Unit")
    c.drawRightString(550, y, "Total")
    y -= 10
    c.line(40, y, 550, y)
    y -= 16

    c.setFont("Helvetica", 10)
    if not order.items:
        c.drawString(40, y, "No items available.")
        y -= 14
    for it in order.items:
        item_name = it.display_name
        meta = f"Code: {it.product_code or it.product_id or 'N/A'}"
        if it.variant:
            meta += f" / {it.variant}"
        c.drawString(40, y, item_name[:50])
        c.drawRightString(345, y, str(int(it.quantity or 0)))
        c.drawRightString(450, y, money(it.price, with_symbol=False))
        c.drawRightString(550, y, money(float(it.price or 0) * int(it.quantity or 0), with_symbol=False))
        y -= 12
        c.setFont("Helvetica", 8)
        c.drawString(40, y, meta[:70])
        c.setFont("Helvetica", 10)
        y -= 16
        if y < 120:
            c.showPage()
            y = h - 50
            c.setFont("Helvetica", 10)

    y -= 4
    c.line(330, y, 550, y)
    y -= 16
    c.drawString(330, y, "Subtotal")
    c.drawRightString(550, y, money(totals.subtotal, with_symbol=False))
    y -= 14
    c.drawString(330, y, "Processing fee")
    c.drawRightString(550, y, money(totals.processing_fee, with_symbol=False))
    y -= 16
    c.setFont("Helvetica-Bold", 12)
    c.drawString(330, y, f"Total ({settings.currency})")
    c.drawRightString(550, y, money(totals.total, with_symbol=False))

    c.setFont("Helvetica", 9)
    c.drawCentredString(w / 2, 50, f"Thanks for shopping with {settings.store_name}.")

    c.save()
    return path
