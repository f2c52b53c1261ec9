"""
Configuration constants and enums for the Payment Resolution QC Service.
"""

import logging
import os
from enum import Enum
from typing import Final

# ============================================================================
# Check Names
# ============================================================================

class CheckName(str, Enum):
    """Pass/fail checks reported in every validation result."""
    IDENTITY_MATCH = "identity_match"
    AMOUNTS_CONSISTENT = "amounts_consistent"
    ORDER_AMOUNT_SUFFICIENT = "order_amount_sufficient"
    DESCRIPTION_CONSISTENT = "description_consistent"
    RECEIPT_CONFORMING = "receipt_conforming"


# ============================================================================
# Document Labels
# ============================================================================

class DocumentType(str, Enum):
    """The three source documents behind a payment resolution."""
    INVOICE = "invoice"
    PURCHASE_ORDER = "purchase_order"
    RECEIPT = "receipt"


# Human-readable names used inside discrepancy messages
DOCUMENT_LABELS: Final[dict[DocumentType, str]] = {
    DocumentType.INVOICE: "Invoice",
    DocumentType.PURCHASE_ORDER: "Purchase Order",
    DocumentType.RECEIPT: "Receipt Acknowledgment",
}

# ============================================================================
# Message Formatting
# ============================================================================

# Prefix for amounts rendered in discrepancy messages (e.g. "$1.190.000")
AMOUNT_CURRENCY_SYMBOL: Final[str] = os.getenv("AMOUNT_CURRENCY_SYMBOL", "$")

# Echoed in the checklist when the purchase order carries no budget line
MISSING_BUDGET_ITEM_LABEL: Final[str] = os.getenv("MISSING_BUDGET_ITEM_LABEL", "(Not provided)")

# ============================================================================
# API Configuration
# ============================================================================

API_HOST: Final[str] = os.getenv("API_HOST", "0.0.0.0")
API_PORT: Final[int] = int(os.getenv("API_PORT", "8000"))

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")

def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("resolution_qc")


logger = setup_logging()
