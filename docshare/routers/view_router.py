"""
docshare/routers/view_router.py
Public viewer. No authentication, no storage: the `d` query parameter is the
only input. A missing or undecodable `d` renders the invalid-link page.
"""
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from ..models import DocumentKind
from ..services.codec import decode
from ..services.viewer import render_booking, render_estimate, render_invalid, render_invoice

router = APIRouter(tags=["Viewer"])

# path_id / operator_id are cosmetic; the payload carries everything shown


def _respond(html: Optional[str], kind: str) -> HTMLResponse:
    if html is None:
        return HTMLResponse(render_invalid(kind), status_code=404)
    return HTMLResponse(html)


@router.get("/view/estimate/{path_id}", response_class=HTMLResponse)
async def view_estimate(path_id: str, d: Optional[str] = Query(None)):
    return _respond(render_estimate(decode(d)), DocumentKind.ESTIMATE.value)


@router.get("/view/invoice/{path_id}", response_class=HTMLResponse)
async def view_invoice(path_id: str, d: Optional[str] = Query(None)):
    return _respond(render_invoice(decode(d)), DocumentKind.INVOICE.value)


@router.get("/book/{operator_id}", response_class=HTMLResponse)
async def view_booking(operator_id: str, d: Optional[str] = Query(None)):
    return _respond(render_booking(decode(d)), "booking")
