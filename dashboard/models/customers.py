# dashboard/models/customers.py

from typing import List, Optional

from pydantic import BaseModel

from dashboard.models.invoices import InvoiceOut


class CustomerField(BaseModel):
    id: str
    name: str


class CustomerTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: Optional[str] = None
    total_invoices: int
    total_pending: int
    total_paid: int


class InvoiceFormContext(BaseModel):
    """What the create/edit forms need: the customer picker and, when editing, the invoice."""

    customers: List[CustomerField]
    invoice: Optional[InvoiceOut] = None
