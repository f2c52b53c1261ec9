"""
Cross-document validation rules for payment resolutions.

Rules are grouped in three families, executed in this order:
- Identity rule: the supplier tax ID must match on all three documents
- Amount rules: the invoice must fit under the purchase order ceiling and
  equal the amount acknowledged on the receipt
- Integrity rule: fields needed for the resolution must be present and the
  receipt must be declared conforming

Each rule receives the document set and the shared discrepancy list. It
appends one message per failed condition and returns the outcome of the
checks it owns. Rules never short-circuit each other and never raise for
bad data.
"""

from dataclasses import dataclass
from typing import Callable

from .config import DOCUMENT_LABELS, CheckName, DocumentType
from .normalizers import (
    format_amount,
    has_value,
    is_valid_amount,
    normalize_amount,
    normalize_tax_id,
)
from .schemas import DocumentSet


# Type alias for rule check functions
# The function takes the document set and the discrepancy list, returns check outcomes
RuleCheckFn = Callable[[DocumentSet, list[str]], dict[CheckName, bool]]


@dataclass(frozen=True)
class ValidationRule:
    """
    Represents a single validation rule.

    Attributes:
        name: Machine-readable rule name (e.g., "identity")
        description: Human-readable description of the rule
        checks: Checklist entries decided by this rule
        check: Function that performs the validation
    """
    name: str
    description: str
    checks: tuple[CheckName, ...]
    check: RuleCheckFn


_INVOICE = DOCUMENT_LABELS[DocumentType.INVOICE]
_ORDER = DOCUMENT_LABELS[DocumentType.PURCHASE_ORDER]
_RECEIPT = DOCUMENT_LABELS[DocumentType.RECEIPT]


# ============================================================================
# Identity Rule
# ============================================================================

def check_identity(documents: DocumentSet, discrepancies: list[str]) -> dict[CheckName, bool]:
    """
    The supplier tax ID must be the same on invoice, order and receipt.

    A missing ID on any document yields a single discrepancy and no pairwise
    comparison. Otherwise each mismatching pair is reported with the values
    as they were written on the documents.
    """
    raw = {
        DocumentType.INVOICE: documents.invoice.supplier_tax_id,
        DocumentType.PURCHASE_ORDER: documents.purchase_order.supplier_tax_id,
        DocumentType.RECEIPT: documents.receipt.supplier_tax_id,
    }
    normalized = {doc: normalize_tax_id(value) for doc, value in raw.items()}

    if not all(normalized.values()):
        discrepancies.append("The supplier tax ID is missing from one or more documents.")
        return {CheckName.IDENTITY_MATCH: False}

    matched = True
    pairs = [
        (DocumentType.INVOICE, DocumentType.PURCHASE_ORDER),
        (DocumentType.INVOICE, DocumentType.RECEIPT),
        (DocumentType.PURCHASE_ORDER, DocumentType.RECEIPT),
    ]
    for left, right in pairs:
        if normalized[left] != normalized[right]:
            discrepancies.append(
                f"The {DOCUMENT_LABELS[left]} tax ID ({raw[left]}) does not match "
                f"the {DOCUMENT_LABELS[right]} tax ID ({raw[right]})."
            )
            matched = False

    return {CheckName.IDENTITY_MATCH: matched}


# ============================================================================
# Amount Rules
# ============================================================================

def check_amounts(documents: DocumentSet, discrepancies: list[str]) -> dict[CheckName, bool]:
    """
    Compare invoice total against the order ceiling and the settled amount.

    - Sufficiency: the invoice total must not exceed the order total.
    - Consistency: the invoice total must not exceed the received amount,
      and must equal it exactly. Both messages fire when the invoice is
      above the received amount.

    An unparseable amount is reported by field and fails the checks that
    depend on it; numeric comparison is skipped when any amount is invalid.
    """
    invoice_total = normalize_amount(documents.invoice.total_amount)
    order_total = normalize_amount(documents.purchase_order.total_amount)
    received = normalize_amount(documents.receipt.received_amount)

    consistent = True
    sufficient = True

    if not is_valid_amount(invoice_total):
        discrepancies.append(f"The {_INVOICE} total amount is not a valid number.")
        consistent = False
    if not is_valid_amount(order_total):
        discrepancies.append(f"The {_ORDER} total amount is not a valid number.")
        sufficient = False
    if not is_valid_amount(received):
        discrepancies.append(f"The {_RECEIPT} received amount is not a valid number.")
        consistent = False

    if all(is_valid_amount(value) for value in (invoice_total, order_total, received)):
        if invoice_total > order_total:
            discrepancies.append(
                f"The {_INVOICE} amount ({format_amount(invoice_total)}) exceeds "
                f"the {_ORDER} amount ({format_amount(order_total)})."
            )
            sufficient = False

        if invoice_total > received:
            discrepancies.append(
                f"The {_INVOICE} amount ({format_amount(invoice_total)}) exceeds "
                f"the received amount ({format_amount(received)})."
            )
            consistent = False

        if invoice_total != received:
            discrepancies.append(
                f"The {_INVOICE} amount ({format_amount(invoice_total)}) does not exactly "
                f"match the received amount ({format_amount(received)})."
            )
            consistent = False

    return {
        CheckName.AMOUNTS_CONSISTENT: consistent,
        CheckName.ORDER_AMOUNT_SUFFICIENT: sufficient,
    }


# ============================================================================
# Integrity Rule
# ============================================================================

def check_integrity(documents: DocumentSet, discrepancies: list[str]) -> dict[CheckName, bool]:
    """
    Fields required to issue the resolution must be present, and the
    receipt must be declared conforming.

    Every missing field is reported on its own. Description consistency
    only looks at the invoice's own description; the free text on the order
    and receipt is not compared.
    """
    invoice = documents.invoice
    order = documents.purchase_order
    receipt = documents.receipt

    if not has_value(order.budget_item):
        discrepancies.append(f"The budget line item is missing from the {_ORDER}.")

    if not has_value(invoice.invoice_number):
        discrepancies.append(f"The {_INVOICE} number is missing.")

    if not has_value(order.order_number):
        discrepancies.append(f"The {_ORDER} number is missing.")

    if not has_value(receipt.receipt_number):
        discrepancies.append(f"The {_RECEIPT} number is missing.")

    conforming = receipt.conforming is True
    if not conforming:
        discrepancies.append(
            f"The {_RECEIPT} does NOT declare conformity; "
            "the goods or services were not received as conforming."
        )

    description_consistent = has_value(invoice.service_description)
    if not description_consistent:
        discrepancies.append(f"The service or goods description is missing from the {_INVOICE}.")

    if not has_value(invoice.supplier_name):
        discrepancies.append(f"The supplier name is missing from the {_INVOICE}.")

    if not has_value(invoice.issue_date):
        discrepancies.append(f"The {_INVOICE} issue date is missing.")

    if not has_value(receipt.receipt_date):
        discrepancies.append(f"The receipt date is missing from the {_RECEIPT}.")

    return {
        CheckName.DESCRIPTION_CONSISTENT: description_consistent,
        CheckName.RECEIPT_CONFORMING: conforming,
    }


# ============================================================================
# Rule Registry
# ============================================================================

# All validation rules in execution order
VALIDATION_RULES: list[ValidationRule] = [
    ValidationRule(
        name="identity",
        description="Supplier tax ID must match on invoice, purchase order and receipt",
        checks=(CheckName.IDENTITY_MATCH,),
        check=check_identity,
    ),
    ValidationRule(
        name="amounts",
        description="Invoice total must not exceed the order total and must equal the received amount",
        checks=(CheckName.AMOUNTS_CONSISTENT, CheckName.ORDER_AMOUNT_SUFFICIENT),
        check=check_amounts,
    ),
    ValidationRule(
        name="integrity",
        description="Required fields must be present and the receipt must be declared conforming",
        checks=(CheckName.DESCRIPTION_CONSISTENT, CheckName.RECEIPT_CONFORMING),
        check=check_integrity,
    ),
]


def get_rule(name: str) -> ValidationRule:
    """Look up a registered rule by name."""
    for rule in VALIDATION_RULES:
        if rule.name == name:
            return rule
    raise KeyError(f"Unknown rule: {name}")


def get_rule_descriptions() -> dict[str, str]:
    """Get a mapping of rule names to their descriptions."""
    return {rule.name: rule.description for rule in VALIDATION_RULES}
