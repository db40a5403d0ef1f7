# dashboard/lib/validation.py
"""
Form validation that reports problems as data instead of raising.

A FormValidator wraps a pydantic model. Every rule violation is collected
and mapped to a user-facing message keyed by the form field that produced
it, so the caller can put each message next to its input.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from dashboard.models.invoices import CreateInvoiceForm, UpdateInvoiceForm

M = TypeVar("M", bound=BaseModel)

INVOICE_FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than 0.",
    "status": "Please select an invoice status.",
}


@dataclass(frozen=True)
class Valid(Generic[M]):
    data: M


@dataclass(frozen=True)
class Invalid:
    field_errors: Dict[str, List[str]] = field(default_factory=dict)


ValidationResult = Union[Valid[M], Invalid]


class FormValidator(Generic[M]):
    """Stateless; build once and share."""

    def __init__(self, model: Type[M], messages: Mapping[str, str]) -> None:
        self.model = model
        self.messages = dict(messages)
        # form field names, i.e. aliases where the model declares them
        self.fields = [
            info.alias or name for name, info in model.model_fields.items()
        ]

    def validate(self, raw: Mapping[str, Any]) -> ValidationResult:
        # only the fields the model knows about; anything else in the form is ignored
        picked = {name: raw.get(name) for name in self.fields}
        try:
            data = self.model.model_validate(picked)
        except ValidationError as exc:
            return Invalid(self._field_errors(exc))
        return Valid(data)

    def _field_errors(self, exc: ValidationError) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else "__root__"
            message = self.messages.get(name, error["msg"])
            bucket = errors.setdefault(name, [])
            if message not in bucket:
                bucket.append(message)
        return errors


CREATE_INVOICE = FormValidator(CreateInvoiceForm, INVOICE_FIELD_MESSAGES)
UPDATE_INVOICE = FormValidator(UpdateInvoiceForm, INVOICE_FIELD_MESSAGES)
