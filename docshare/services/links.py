"""
docshare/services/links.py
Shareable URLs and the text message that carries them.

  {share_base_url}/view/{estimate|invoice}/{id[:8]}?d={token}
  {share_base_url}/book/{operator_id}?d={token}
"""
from typing import Optional, Sequence

from ..config import get_settings
from ..models import DocumentKind, PriceBookService
from .codec import encode
from .projection import Document, document_kind, project, project_booking

_MESSAGE_TEMPLATES = {
    DocumentKind.ESTIMATE: "Here's your estimate from {business}: {url}",
    DocumentKind.INVOICE: "Here's your invoice from {business}: {url}",
}


def path_id(document: Document) -> str:
    """URL path segment: first 8 characters of the document id, case kept."""
    return document.id[:8]


def embedded_business_name(business_name: Optional[str]) -> Optional[str]:
    """
    Business name to put in the payload. The default phrase ("our company")
    is only for the message text and never travels inside the link.
    """
    if not business_name or business_name == get_settings().default_business_name:
        return None
    return business_name


def build_share_url(document: Document, customer_name: str, business_name: Optional[str] = None) -> str:
    kind = document_kind(document)
    token = encode(project(document, customer_name, business_name))
    base = get_settings().share_base_url.rstrip("/")
    return f"{base}/view/{kind.value}/{path_id(document)}?d={token}"


def build_share_message(document: Document, customer_name: str, business_name: Optional[str] = None) -> str:
    embedded = embedded_business_name(business_name)
    shown = embedded or get_settings().default_business_name
    url = build_share_url(document, customer_name, embedded)
    return _MESSAGE_TEMPLATES[document_kind(document)].format(business=shown, url=url)


def build_booking_url(
    operator_id: str,
    services: Sequence[PriceBookService],
    business_name: str,
    phone: Optional[str] = None,
    email: Optional[str] = None,
) -> str:
    token = encode(project_booking(services, business_name, phone, email))
    base = get_settings().share_base_url.rstrip("/")
    return f"{base}/book/{operator_id}?d={token}"
