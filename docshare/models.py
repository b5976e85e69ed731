from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Union
from enum import Enum
import sys


Number = Union[int, float]
CompactLineItem = Tuple[str, Number, Number]


def _within_float_range(value: Number) -> Number:
    # JSON ints are unbounded; anything past float range cannot be priced or formatted
    if isinstance(value, int) and abs(value) > sys.float_info.max:
        raise ValueError("number is out of range")
    return value


ViewNumber = Annotated[Number, AfterValidator(_within_float_range)]
ViewLineItem = Tuple[str, ViewNumber, ViewNumber]


class DocumentKind(str, Enum):
    ESTIMATE = "estimate"
    INVOICE = "invoice"


class EstimateStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class _AppModel(BaseModel):
    """Accepts the mobile app's camelCase JSON as well as snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


# ─── Source entities ───────────────────────────────────────────────────────────

class LineItem(_AppModel):
    id: str
    service_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    quantity: Number
    unit_price: Number
    total: Number


class Payment(_AppModel):
    id: str
    invoice_id: str
    amount: Number
    method: str = "other"
    notes: Optional[str] = None
    paid_at: str


class Estimate(_AppModel):
    kind: ClassVar[DocumentKind] = DocumentKind.ESTIMATE

    id: str
    customer_id: str
    job_id: Optional[str] = None
    line_items: List[LineItem] = Field(default_factory=list)
    subtotal: Number
    tax_rate: Number
    tax_amount: Number
    total: Number
    status: EstimateStatus = EstimateStatus.DRAFT
    notes: Optional[str] = None
    expires_at: str
    share_token: Optional[str] = None
    created_at: str
    updated_at: str


class Invoice(_AppModel):
    kind: ClassVar[DocumentKind] = DocumentKind.INVOICE

    id: str
    invoice_number: str
    customer_id: str
    job_id: Optional[str] = None
    estimate_id: Optional[str] = None
    line_items: List[LineItem] = Field(default_factory=list)
    subtotal: Number
    tax_rate: Number
    tax_amount: Number
    total: Number
    status: InvoiceStatus = InvoiceStatus.DRAFT
    payment_terms: Optional[str] = None
    due_date: Optional[str] = None
    paid_at: Optional[str] = None
    share_token: Optional[str] = None
    payments: List[Payment] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: str
    updated_at: str


class PriceBookService(_AppModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Number
    estimated_duration: int = 60  # minutes
    category: str = ""
    is_active: bool = True
    sort_order: int = 0
    created_at: str = ""
    updated_at: str = ""


# ─── Request / Response Models ─────────────────────────────────────────────────

class ShareEstimateRequest(_AppModel):
    estimate: Estimate
    customer_name: str = Field(..., description="Display name shown on the shared estimate")
    business_name: Optional[str] = Field(None, description="Omit to use the default phrasing")


class ShareInvoiceRequest(_AppModel):
    invoice: Invoice
    customer_name: str = Field(..., description="Display name shown on the shared invoice")
    business_name: Optional[str] = Field(None, description="Omit to use the default phrasing")


class ShareBookingRequest(_AppModel):
    operator_id: str
    services: List[PriceBookService] = Field(default_factory=list)
    business_name: str
    business_phone: Optional[str] = None
    business_email: Optional[str] = None


class ShareResponse(BaseModel):
    url: str
    message: Optional[str] = None
    token: str
    payload: Dict[str, Any]


# ─── Decoded payload views (used by the public viewer) ─────────────────────────

class DocumentView(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    number: str = Field(alias="n")
    customer_name: str = Field(alias="c")
    line_items: List[ViewLineItem] = Field(alias="li")
    subtotal: ViewNumber = Field(alias="st")
    tax_rate: ViewNumber = Field(alias="tr")
    tax_amount: ViewNumber = Field(alias="ta")
    total: ViewNumber = Field(alias="t")
    notes: Optional[str] = Field(None, alias="no")
    created: str = Field(alias="dt")
    business_name: Optional[str] = Field(None, alias="bn")


class EstimateView(DocumentView):
    expires: str = Field(alias="ex")


class InvoiceView(DocumentView):
    payment_terms: Optional[str] = Field(None, alias="pt")
    due_date: Optional[str] = Field(None, alias="dd")
    status: str = Field(alias="s")


class BookingView(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    business_name: str = Field(alias="bn")
    services: List[Tuple[str, ViewNumber]] = Field(alias="sv")
    phone: Optional[str] = Field(None, alias="ph")
    email: Optional[str] = Field(None, alias="em")
