"""
Shared fixtures: a fully consistent invoice / purchase order / receipt set.
"""

import pytest

from resolution_qc.schemas import DocumentSet, Invoice, PurchaseOrder, ReceiptAcknowledgment


@pytest.fixture
def invoice() -> Invoice:
    return Invoice(
        supplier_tax_id="76.123.456-7",
        supplier_name="Servicios Integrales SpA",
        invoice_number="F-10234",
        issue_date="2024-03-05",
        net_amount=1000000,
        vat_amount=190000,
        total_amount=1190000,
        service_description="Mantención de equipos de climatización",
    )


@pytest.fixture
def purchase_order() -> PurchaseOrder:
    return PurchaseOrder(
        order_number="OC-2024-881",
        supplier_tax_id="76123456-7",
        supplier_name="Servicios Integrales SpA",
        total_amount=1500000,
        budget_item="Subtítulo 22, Ítem 04",
        description="Mantención de equipos",
        order_date="2024-02-10",
    )


@pytest.fixture
def receipt() -> ReceiptAcknowledgment:
    return ReceiptAcknowledgment(
        receipt_number="AR-0042",
        supplier_tax_id="76 123 456-7",
        received_amount="$1.190.000",
        receipt_date="2024-03-04",
        description="Mantención realizada",
        conforming=True,
    )


@pytest.fixture
def documents(invoice, purchase_order, receipt) -> DocumentSet:
    return DocumentSet(invoice=invoice, purchase_order=purchase_order, receipt=receipt)


@pytest.fixture
def payload(documents) -> dict:
    """The consistent set as raw JSON-ready extractor output."""
    return documents.model_dump(mode="json")
