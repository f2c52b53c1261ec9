"""
Pydantic models for source documents and validation results.

This module defines the core data structures used throughout the Payment Resolution QC Service:
- Invoice, PurchaseOrder and ReceiptAcknowledgment records produced by the extractor
- DocumentSet bundling the three records for one payment
- ValidationResult, the immutable contract handed to the resolution generator
- ValidationSummary for batch-level statistics
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

from .config import CheckName


# A monetary value as the extractor returns it: a number, or a locale string like "$1.190.000"
Amount = Optional[Union[StrictInt, StrictFloat, StrictStr]]


# ============================================================================
# Source Documents
# ============================================================================

class Invoice(BaseModel):
    """
    Fields extracted from the supplier's invoice.

    Every field may be missing or blank; the validation rules report
    absent data instead of rejecting the record.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "supplier_tax_id": "76.123.456-7",
                    "supplier_name": "Servicios Integrales SpA",
                    "invoice_number": "F-10234",
                    "issue_date": "2024-03-05",
                    "net_amount": 1000000,
                    "vat_amount": 190000,
                    "total_amount": 1190000,
                    "service_description": "Mantención de equipos de climatización",
                }
            ]
        },
    )

    supplier_tax_id: Optional[str] = Field(None, description="Supplier tax ID (RUT), any punctuation")
    supplier_name: Optional[str] = Field(None, description="Supplier legal name")
    invoice_number: Optional[str] = Field(None, description="Invoice identifier")
    issue_date: Optional[str] = Field(None, description="Issue date (YYYY-MM-DD)")
    net_amount: Amount = Field(None, description="Amount before VAT")
    vat_amount: Amount = Field(None, description="VAT amount")
    total_amount: Amount = Field(None, description="Total amount including VAT")
    service_description: Optional[str] = Field(None, description="Invoiced goods or services")


class PurchaseOrder(BaseModel):
    """Fields extracted from the purchase order that authorized the spend."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "order_number": "OC-2024-881",
                    "supplier_tax_id": "76123456-7",
                    "supplier_name": "Servicios Integrales SpA",
                    "total_amount": 1500000,
                    "budget_item": "Subtítulo 22, Ítem 04",
                    "description": "Mantención de equipos",
                    "order_date": "2024-02-10",
                }
            ]
        },
    )

    order_number: Optional[str] = Field(None, description="Purchase order identifier")
    supplier_tax_id: Optional[str] = Field(None, description="Awarded supplier tax ID")
    supplier_name: Optional[str] = Field(None, description="Awarded supplier legal name")
    total_amount: Amount = Field(None, description="Authorized ceiling for the order")
    budget_item: Optional[str] = Field(None, description="Budget line item charged")
    description: Optional[str] = Field(None, description="Contracted goods or services")
    order_date: Optional[str] = Field(None, description="Order date (YYYY-MM-DD)")


class ReceiptAcknowledgment(BaseModel):
    """Fields extracted from the goods/services receipt acknowledgment."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "receipt_number": "AR-0042",
                    "supplier_tax_id": "76.123.456-7",
                    "received_amount": "$1.190.000",
                    "receipt_date": "2024-03-04",
                    "description": "Mantención realizada",
                    "conforming": True,
                }
            ]
        },
    )

    receipt_number: Optional[str] = Field(None, description="Receipt acknowledgment identifier")
    supplier_tax_id: Optional[str] = Field(None, description="Supplier tax ID")
    received_amount: Amount = Field(None, description="Amount received and accepted")
    receipt_date: Optional[str] = Field(None, description="Receipt date (YYYY-MM-DD)")
    description: Optional[str] = Field(None, description="Received goods or services")
    conforming: Optional[StrictBool] = Field(
        None,
        description="True only when the receipt was declared conforming",
    )


class DocumentSet(BaseModel):
    """The three correlated documents behind one payment."""
    model_config = ConfigDict(frozen=True)

    invoice: Invoice
    purchase_order: PurchaseOrder
    receipt: ReceiptAcknowledgment


# ============================================================================
# Validation Results
# ============================================================================

class Verdict(str, Enum):
    """Outcome of a cross-document validation."""
    APPROVED = "APPROVED"
    FLAGGED = "FLAGGED"


class CheckResult(BaseModel):
    """
    Checklist of pass/fail outcomes.

    ``budget_item`` is not a check; it echoes the purchase order's budget
    line so the resolution document can display it.
    """
    model_config = ConfigDict(frozen=True)

    identity_match: bool = Field(..., description="Supplier tax ID matches across all three documents")
    amounts_consistent: bool = Field(..., description="Invoice total equals the received amount")
    order_amount_sufficient: bool = Field(..., description="Invoice total does not exceed the order total")
    description_consistent: bool = Field(..., description="Invoice carries a service description")
    receipt_conforming: bool = Field(..., description="Receipt was declared conforming")
    budget_item: str = Field(..., description="Budget line item from the purchase order")

    def failed_checks(self) -> list[str]:
        """Names of the checks that did not pass, in declaration order."""
        return [name.value for name in CheckName if not getattr(self, name.value)]


class ValidationResult(BaseModel):
    """
    Immutable outcome of one validation call.

    The verdict is APPROVED exactly when the discrepancy list is empty;
    construction fails otherwise.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "verdict": "FLAGGED",
                    "checks": {
                        "identity_match": True,
                        "amounts_consistent": True,
                        "order_amount_sufficient": True,
                        "description_consistent": True,
                        "receipt_conforming": False,
                        "budget_item": "Subtítulo 22, Ítem 04",
                    },
                    "discrepancies": [
                        "The Receipt Acknowledgment does NOT declare conformity; "
                        "the goods or services were not received as conforming."
                    ],
                    "validated_at": "2024-03-06T14:02:11.504211Z",
                }
            ]
        },
    )

    verdict: Verdict
    checks: CheckResult
    discrepancies: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Human-readable discrepancies in rule execution order",
    )
    validated_at: datetime = Field(..., description="UTC timestamp stamped at aggregation")

    @model_validator(mode="after")
    def verdict_matches_discrepancies(self) -> "ValidationResult":
        expected = Verdict.FLAGGED if self.discrepancies else Verdict.APPROVED
        if self.verdict != expected:
            raise ValueError(
                f"verdict {self.verdict.value} is inconsistent with "
                f"{len(self.discrepancies)} discrepancies"
            )
        return self

    @property
    def is_approved(self) -> bool:
        return self.verdict == Verdict.APPROVED


class ValidationPackage(BaseModel):
    """Validation result bundled with the records it judged, for the resolution generator."""
    model_config = ConfigDict(frozen=True)

    validation: ValidationResult
    validated_data: DocumentSet


class ValidationSummary(BaseModel):
    """
    Aggregated statistics for a batch of document sets.
    """
    total: int = Field(..., ge=0, description="Number of document sets validated")
    approved: int = Field(..., ge=0, description="Number of APPROVED verdicts")
    flagged: int = Field(..., ge=0, description="Number of FLAGGED verdicts")
    check_failures: dict[str, int] = Field(
        default_factory=dict,
        description="How many document sets failed each check",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "total": 10,
                    "approved": 7,
                    "flagged": 3,
                    "check_failures": {
                        "identity_match": 1,
                        "amounts_consistent": 2,
                    },
                }
            ]
        }
    }


# ============================================================================
# API Request/Response Models
# ============================================================================

class ApiResponse(BaseModel):
    """Envelope returned by every validation endpoint."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    details: Optional[str] = None
