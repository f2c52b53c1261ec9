"""
Payment Resolution Quality Control Service

Cross-validates the data extracted from an invoice, its purchase order and
the goods-receipt acknowledgment, and decides whether a payment can be
authorized.
"""

__version__ = "0.1.0"
__author__ = "Payment Resolution QC Team"

from .schemas import (
    CheckResult,
    DocumentSet,
    Invoice,
    PurchaseOrder,
    ReceiptAcknowledgment,
    ValidationPackage,
    ValidationResult,
    Verdict,
)
from .boundary import DocumentSchemaError, parse_documents
from .validator import validate, validate_documents, validate_and_package, validate_batch

__all__ = [
    "CheckResult",
    "DocumentSet",
    "Invoice",
    "PurchaseOrder",
    "ReceiptAcknowledgment",
    "ValidationPackage",
    "ValidationResult",
    "Verdict",
    "DocumentSchemaError",
    "parse_documents",
    "validate",
    "validate_documents",
    "validate_and_package",
    "validate_batch",
]
