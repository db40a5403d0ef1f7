# dashboard/models/invoices.py

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

InvoiceStatus = Literal["pending", "paid"]

# largest amount whose minor units still fit a signed 64-bit INTEGER column
MAX_AMOUNT = Decimal(2**63 - 1) / 100


class InvoiceForm(BaseModel):
    """
    Fields a user submits for an invoice. `id` and `date` are never part of
    the form: the server assigns both.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(alias="customerId", min_length=1)
    # major units (dollars) as typed into the form
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        # a blank or missing amount counts as 0, not as a missing field
        if value is None:
            return 0
        if isinstance(value, str):
            value = value.strip()
            return value or 0
        return value


class CreateInvoiceForm(InvoiceForm):
    pass


class UpdateInvoiceForm(InvoiceForm):
    pass


class InvoiceActionState(BaseModel):
    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None
    # storage failure; never part of the serialized state
    failed: bool = Field(default=False, exclude=True)


class InvoiceOut(BaseModel):
    id: str
    customer_id: str
    amount: Decimal  # major units
    status: InvoiceStatus
    date: date


class InvoiceTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: Optional[str] = None
    amount: int  # minor units
    status: InvoiceStatus
    date: date


class InvoicesPage(BaseModel):
    items: List[InvoiceTableRow]
    query: str
    current_page: int
    total_pages: int


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: int
    total_pending_invoices: int
