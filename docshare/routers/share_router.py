"""
docshare/routers/share_router.py
Builds shareable links. Called by the mobile app when the user taps "Share";
nothing is stored, the link itself carries the document.
"""
import logging

from fastapi import APIRouter

from ..models import ShareBookingRequest, ShareEstimateRequest, ShareInvoiceRequest, ShareResponse
from ..services.codec import encode
from ..services.links import (
    build_booking_url,
    build_share_message,
    build_share_url,
    embedded_business_name,
    path_id,
)
from ..services.projection import project, project_booking

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/share", tags=["Share"])


def _share(document, customer_name: str, business_name) -> ShareResponse:
    embedded = embedded_business_name(business_name)
    payload = project(document, customer_name, embedded)
    response = ShareResponse(
        url=build_share_url(document, customer_name, embedded),
        message=build_share_message(document, customer_name, business_name),
        token=encode(payload),
        payload=payload,
    )
    logger.info("Share link built for %s %s", document.kind.value, path_id(document))
    return response


@router.post("/estimate", response_model=ShareResponse)
async def share_estimate(body: ShareEstimateRequest):
    """Link + ready-to-send message for an estimate."""
    return _share(body.estimate, body.customer_name, body.business_name)


@router.post("/invoice", response_model=ShareResponse)
async def share_invoice(body: ShareInvoiceRequest):
    """Link + ready-to-send message for an invoice."""
    return _share(body.invoice, body.customer_name, body.business_name)


@router.post("/booking", response_model=ShareResponse)
async def share_booking(body: ShareBookingRequest):
    """Public booking page link listing the operator's active services."""
    payload = project_booking(body.services, body.business_name, body.business_phone, body.business_email)
    url = build_booking_url(
        body.operator_id, body.services, body.business_name, body.business_phone, body.business_email
    )
    logger.info("Booking link built for operator %s", body.operator_id)
    return ShareResponse(url=url, token=encode(payload), payload=payload)
