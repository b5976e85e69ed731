"""
docshare/services/projection.py
Projects estimates, invoices and booking pages onto the compact share payload.

Payload keys (fixed, read by the public viewer):
  n  number          c  customer        li [name, qty, unitPrice] lists
  st subtotal        tr tax rate        ta tax amount       t  total
  no notes*          dt created date    bn business name*
  ex expires (estimate)
  pt payment terms*, dd due date*, s status (invoice)
  * omitted entirely when empty

Booking payload: bn, sv [name, price] lists, ph*, em*
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..models import DocumentKind, Estimate, Invoice, LineItem, PriceBookService

Document = Union[Estimate, Invoice]
Payload = Dict[str, Any]


def date_only(value: str) -> str:
    """``2026-02-14T12:00:00.000Z`` -> ``2026-02-14``; bare dates pass through."""
    return value.split("T", 1)[0]


def _put_if_present(payload: Payload, key: str, value: Optional[str]) -> None:
    if value:
        payload[key] = value


def compact_line_items(items: Sequence[LineItem]) -> List[list]:
    return [[item.name, item.quantity, item.unit_price] for item in items]


# ─── Per-kind schemas ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class _Schema:
    short_id: Callable[[Any], str]
    dated_fields: Callable[[Any], Payload]               # written before "dt"
    tail_fields: Callable[[Any], Payload] = lambda _doc: {}  # written after "dt"


def _estimate_dated(estimate: Estimate) -> Payload:
    return {"ex": date_only(estimate.expires_at)}


def _invoice_dated(invoice: Invoice) -> Payload:
    fields: Payload = {}
    _put_if_present(fields, "pt", invoice.payment_terms)
    if invoice.due_date:
        fields["dd"] = date_only(invoice.due_date)
    return fields


def _invoice_tail(invoice: Invoice) -> Payload:
    return {"s": invoice.status.value}


_SCHEMAS: Dict[DocumentKind, _Schema] = {
    DocumentKind.ESTIMATE: _Schema(
        short_id=lambda estimate: estimate.id[:8].upper(),
        dated_fields=_estimate_dated,
    ),
    DocumentKind.INVOICE: _Schema(
        short_id=lambda invoice: invoice.invoice_number,
        dated_fields=_invoice_dated,
        tail_fields=_invoice_tail,
    ),
}


def document_kind(document: Document) -> DocumentKind:
    kind = getattr(document, "kind", None)
    if kind not in _SCHEMAS:
        raise TypeError(f"Cannot share a {type(document).__name__}")
    return kind


def short_id(document: Document) -> str:
    """Human-facing number: estimate id prefix upper-cased, or the invoice number verbatim."""
    return _SCHEMAS[document_kind(document)].short_id(document)


def project(document: Document, customer_name: str, business_name: Optional[str] = None) -> Payload:
    """
    Build the compact payload for an estimate or invoice.
    Numbers are copied unrounded; the source document is not modified.
    """
    schema = _SCHEMAS[document_kind(document)]
    payload: Payload = {
        "n": schema.short_id(document),
        "c": customer_name,
        "li": compact_line_items(document.line_items),
        "st": document.subtotal,
        "tr": document.tax_rate,
        "ta": document.tax_amount,
        "t": document.total,
    }
    _put_if_present(payload, "no", document.notes)
    payload.update(schema.dated_fields(document))
    payload["dt"] = date_only(document.created_at)
    payload.update(schema.tail_fields(document))
    _put_if_present(payload, "bn", business_name)
    return payload


def project_booking(
    services: Sequence[PriceBookService],
    business_name: str,
    phone: Optional[str] = None,
    email: Optional[str] = None,
) -> Payload:
    """Booking page payload: active services only, in price-book order."""
    payload: Payload = {
        "bn": business_name,
        "sv": [[service.name, service.price] for service in services if service.is_active],
    }
    _put_if_present(payload, "ph", phone)
    _put_if_present(payload, "em", email)
    return payload
