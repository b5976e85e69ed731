"""
docshare/services/viewer.py
Public, stateless document viewer. Everything shown comes from the decoded
link payload, so all templates autoescape.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from jinja2 import Environment
from markupsafe import Markup
from pydantic import ValidationError

from ..config import get_settings
from ..models import BookingView, EstimateView, InvoiceView, Number
from .line_items import expand_line_items

logger = logging.getLogger(__name__)
settings = get_settings()


def format_currency(amount: Number) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{settings.currency_symbol}{abs(amount):,.2f}"


def format_date(value: str) -> str:
    """``2026-03-15`` -> ``March 15, 2026``; anything else is shown as-is."""
    try:
        d = datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return value
    return f"{d:%B} {d.day}, {d.year}"


def format_number(value: Number) -> str:
    return f"{value:g}"


_env = Environment(autoescape=True)
_env.filters.update(currency=format_currency, date=format_date, num=format_number)


PAGE_TEMPLATE = _env.from_string("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<meta name="robots" content="noindex">
<title>{{ title }}</title>
<style>
  body { margin:0; background:#f9fafb; font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',sans-serif; color:#111827; }
  .wrap { max-width:672px; margin:0 auto; padding:32px 16px; }
  .card { background:#fff; border:1px solid #e5e7eb; border-radius:12px; overflow:hidden; }
  .head { background:linear-gradient(90deg,#ea580c,#f97316); color:#fff; padding:32px 24px; }
  .head h1 { margin:0; font-size:24px; }
  .head .num { color:#ffedd5; font-size:14px; margin-top:4px; }
  .badge { float:right; background:#22c55e; color:#fff; padding:8px 16px; border-radius:8px; font-weight:700; font-size:14px; }
  .body { padding:24px; }
  .label { font-size:12px; text-transform:uppercase; letter-spacing:.05em; color:#6b7280; font-weight:600; margin:0 0 4px; }
  .meta { display:flex; justify-content:space-between; gap:16px; margin-bottom:24px; }
  .meta .right { text-align:right; }
  table { width:100%; border-collapse:collapse; border:1px solid #e5e7eb; }
  th, td { padding:12px 16px; text-align:left; }
  th { background:#f9fafb; font-size:12px; text-transform:uppercase; color:#6b7280; }
  td.n, th.n { text-align:right; }
  tr + tr td { border-top:1px solid #f3f4f6; }
  .totals { background:#f9fafb; border-radius:8px; padding:16px; margin-top:24px; }
  .totals div { display:flex; justify-content:space-between; padding:4px 0; color:#4b5563; }
  .totals .grand { font-size:20px; font-weight:700; color:#111827; border-top:1px solid #d1d5db; padding-top:8px; }
  .notes { white-space:pre-wrap; background:#f9fafb; border-radius:8px; padding:16px; font-size:14px; }
  .note-box { border-radius:8px; padding:24px; text-align:center; margin-top:24px; }
  .paid { background:#f0fdf4; border:1px solid #bbf7d0; color:#166534; }
  .due { background:#eff6ff; border:1px solid #bfdbfe; color:#1e40af; }
  .invalid { min-height:80vh; display:flex; align-items:center; justify-content:center; text-align:center; }
  .footer { text-align:center; font-size:12px; color:#9ca3af; margin-top:32px; }
</style>
</head>
<body>
<div class="wrap">
{{ body }}
<p class="footer">Powered by <strong>{{ brand }}</strong></p>
</div>
</body>
</html>
""")


DOCUMENT_TEMPLATE = _env.from_string("""<div class="card">
  <div class="head">
    {% if doc.business_name %}<p style="font-size:18px;font-weight:600;margin:0 0 8px;">{{ doc.business_name }}</p>{% endif %}
    {% if paid %}<span class="badge">&#10003; PAID</span>{% endif %}
    <h1>{{ heading }}</h1>
    <p class="num">#{{ doc.number }}</p>
  </div>
  <div class="body">
    <div class="meta">
      <div>
        <p class="label">{{ recipient_label }}</p>
        <p style="font-size:18px;font-weight:600;margin:0;">{{ doc.customer_name }}</p>
      </div>
      <div class="right">
        <p class="label">{{ date_label }}</p>
        <p>{{ doc.created | date }}</p>
        {% if doc.expires %}<p class="label">Valid Until</p><p>{{ doc.expires | date }}</p>{% endif %}
        {% if doc.due_date %}<p class="label">Due Date</p><p>{{ doc.due_date | date }}</p>{% endif %}
        {% if doc.payment_terms %}<p class="label">Terms</p><p>{{ doc.payment_terms }}</p>{% endif %}
      </div>
    </div>

    <p class="label">Services</p>
    <table>
      <thead><tr><th>Description</th><th class="n">Qty</th><th class="n">Rate</th><th class="n">Amount</th></tr></thead>
      <tbody>
      {% for item in items %}
        <tr><td>{{ item.name }}</td><td class="n">{{ item.quantity | num }}</td><td class="n">{{ item.unit_price | currency }}</td><td class="n">{{ item.total | currency }}</td></tr>
      {% endfor %}
      </tbody>
    </table>

    <div class="totals">
      <div><span>Subtotal</span><span>{{ doc.subtotal | currency }}</span></div>
      {% if doc.tax_rate > 0 %}<div><span>Tax ({{ doc.tax_rate | num }}%)</span><span>{{ doc.tax_amount | currency }}</span></div>{% endif %}
      <div class="grand"><span>{{ total_label }}</span><span>{{ doc.total | currency }}</span></div>
    </div>

    {% if doc.notes %}
    <p class="label" style="margin-top:24px;">Notes</p>
    <p class="notes">{{ doc.notes }}</p>
    {% endif %}

    {% if paid %}
    <div class="note-box paid"><p style="font-weight:600;margin:0;">&#10003; This invoice has been paid</p><p style="margin:4px 0 0;">Thank you for your payment!</p></div>
    {% elif pay_by_phone %}
    <div class="note-box due"><p style="font-weight:600;margin:0;">Pay by Phone</p><p style="margin:4px 0 0;">Call or text to arrange payment. Online payments coming soon.</p></div>
    {% endif %}
  </div>
</div>""")


BOOKING_TEMPLATE = _env.from_string("""<div class="card">
  <div class="head">
    <h1>{{ booking.business_name }}</h1>
    <p class="num">Book a service</p>
  </div>
  <div class="body">
    <p class="label">Services</p>
    <table>
      <tbody>
      {% for name, price in booking.services %}
        <tr><td>{{ name }}</td><td class="n">{{ price | currency }}</td></tr>
      {% else %}
        <tr><td>No services are currently offered online.</td></tr>
      {% endfor %}
      </tbody>
    </table>
    {% if booking.phone or booking.email %}
    <p class="label" style="margin-top:24px;">Contact</p>
    {% if booking.phone %}<p><a href="tel:{{ booking.phone }}">{{ booking.phone }}</a></p>{% endif %}
    {% if booking.email %}<p><a href="mailto:{{ booking.email }}">{{ booking.email }}</a></p>{% endif %}
    {% endif %}
  </div>
</div>""")


INVALID_TEMPLATE = _env.from_string("""<div class="invalid">
  <div>
    <h1>Invalid {{ kind | title }} Link</h1>
    <p style="color:#4b5563;">This {{ kind }} link is invalid or has expired.</p>
  </div>
</div>""")


def _page(title: str, body: str) -> str:
    return PAGE_TEMPLATE.render(title=title, body=Markup(body), brand=settings.brand_name)


def render_invalid(kind: str) -> str:
    return _page(f"Invalid {kind.title()} Link", INVALID_TEMPLATE.render(kind=kind))


def render_estimate(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """HTML for a decoded estimate payload, or None when it does not fit the estimate shape."""
    if payload is None:
        return None
    try:
        doc = EstimateView.model_validate(payload)
        body = DOCUMENT_TEMPLATE.render(
            doc=doc,
            items=expand_line_items(doc.line_items),
            heading="Estimate",
            recipient_label="Prepared For",
            date_label="Date",
            total_label="Total",
            paid=False,
            pay_by_phone=False,
        )
    except (ValidationError, OverflowError) as e:
        logger.debug("Estimate payload rejected: %s", e)
        return None
    return _page(f"Estimate #{doc.number}", body)


def render_invoice(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """HTML for a decoded invoice payload, or None when it does not fit the invoice shape."""
    if payload is None:
        return None
    try:
        doc = InvoiceView.model_validate(payload)
        paid = doc.status == "paid"
        body = DOCUMENT_TEMPLATE.render(
            doc=doc,
            items=expand_line_items(doc.line_items),
            heading="Invoice",
            recipient_label="Bill To",
            date_label="Invoice Date",
            total_label="Amount Due",
            paid=paid,
            pay_by_phone=not paid,
        )
    except (ValidationError, OverflowError) as e:
        # Line totals can still overflow when two in-range numbers multiply
        logger.debug("Invoice payload rejected: %s", e)
        return None
    return _page(f"Invoice #{doc.number}", body)


def render_booking(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    if payload is None:
        return None
    try:
        booking = BookingView.model_validate(payload)
        body = BOOKING_TEMPLATE.render(booking=booking)
    except (ValidationError, OverflowError) as e:
        logger.debug("Booking payload rejected: %s", e)
        return None
    return _page(f"Book with {booking.business_name}", body)
