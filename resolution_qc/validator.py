"""
Validation engine for payment resolutions.

This module runs every rule against a document set, aggregates the
checklist, derives the verdict and stamps the result. It also produces
batch summaries and the text reports printed by the CLI.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Optional, Protocol

from .config import MISSING_BUDGET_ITEM_LABEL, CheckName, logger
from .normalizers import has_value
from .rules import VALIDATION_RULES, ValidationRule
from .schemas import (
    CheckResult,
    DocumentSet,
    Invoice,
    PurchaseOrder,
    ReceiptAcknowledgment,
    ValidationPackage,
    ValidationResult,
    ValidationSummary,
    Verdict,
)


# ============================================================================
# Observers
# ============================================================================

class ValidationObserver(Protocol):
    """Receives each finished result. Must not be relied on for correctness."""

    def on_result(self, result: ValidationResult) -> None:
        ...


class LoggingObserver:
    """Logs the verdict and, when flagged, every discrepancy."""

    def on_result(self, result: ValidationResult) -> None:
        if result.is_approved:
            logger.info("Validation APPROVED: all documents are consistent")
            return
        logger.info(f"Validation FLAGGED: {len(result.discrepancies)} discrepancy(ies) found")
        for i, discrepancy in enumerate(result.discrepancies, start=1):
            logger.info(f"  {i}. {discrepancy}")


class NullObserver:
    """Discards results."""

    def on_result(self, result: ValidationResult) -> None:
        return None


DEFAULT_OBSERVER: ValidationObserver = LoggingObserver()


def _notify(observer: ValidationObserver, result: ValidationResult) -> None:
    try:
        observer.on_result(result)
    except Exception:
        logger.exception(f"Validation observer {type(observer).__name__} failed")


# ============================================================================
# Validation
# ============================================================================

def validate_documents(
    documents: DocumentSet,
    observer: Optional[ValidationObserver] = None,
    rules: Optional[list[ValidationRule]] = None,
) -> ValidationResult:
    """
    Validate one invoice / purchase order / receipt triple.

    Every rule runs, in registry order, even when an earlier one failed.
    A rule that raises is logged and reported as a discrepancy, so this
    function always returns a result.

    Args:
        documents: The three extracted records
        observer: Notified with the finished result (defaults to logging)
        rules: Optional list of rules to apply (defaults to all VALIDATION_RULES)

    Returns:
        ValidationResult with the verdict, checklist and discrepancies
    """
    if rules is None:
        rules = VALIDATION_RULES

    discrepancies: list[str] = []
    outcomes: dict[CheckName, bool] = {name: True for name in CheckName}

    for rule in rules:
        try:
            outcomes.update(rule.check(documents, discrepancies))
        except Exception as e:
            logger.error(f"Error running rule {rule.name}: {e}")
            discrepancies.append(f"The {rule.name} rule could not be evaluated.")
            for name in rule.checks:
                outcomes[name] = False

    budget_item = documents.purchase_order.budget_item
    checks = CheckResult(
        **{name.value: passed for name, passed in outcomes.items()},
        budget_item=budget_item if has_value(budget_item) else MISSING_BUDGET_ITEM_LABEL,
    )

    result = ValidationResult(
        verdict=Verdict.FLAGGED if discrepancies else Verdict.APPROVED,
        checks=checks,
        discrepancies=tuple(discrepancies),
        validated_at=datetime.now(timezone.utc),
    )

    _notify(observer if observer is not None else DEFAULT_OBSERVER, result)
    return result


def validate(
    invoice: Invoice,
    purchase_order: PurchaseOrder,
    receipt: ReceiptAcknowledgment,
    observer: Optional[ValidationObserver] = None,
) -> ValidationResult:
    """Validate the three records for one payment. See validate_documents."""
    documents = DocumentSet(invoice=invoice, purchase_order=purchase_order, receipt=receipt)
    return validate_documents(documents, observer)


def validate_and_package(
    documents: DocumentSet,
    observer: Optional[ValidationObserver] = None,
) -> ValidationPackage:
    """Validate and bundle the result with the untouched records for the resolution generator."""
    return ValidationPackage(
        validation=validate_documents(documents, observer),
        validated_data=documents,
    )


def validate_batch(
    document_sets: list[DocumentSet],
    observer: Optional[ValidationObserver] = None,
) -> tuple[list[ValidationResult], ValidationSummary]:
    """
    Validate several document sets and produce aggregated summary.

    Each set is validated independently; no state is carried between them.

    Args:
        document_sets: Document sets to validate
        observer: Passed through to each validation

    Returns:
        Tuple of (list of per-set results, batch summary)
    """
    logger.info(f"Validating batch of {len(document_sets)} document set(s)")

    results = [validate_documents(documents, observer) for documents in document_sets]

    failures = Counter(name for r in results for name in r.checks.failed_checks())
    approved = sum(1 for r in results if r.is_approved)

    summary = ValidationSummary(
        total=len(results),
        approved=approved,
        flagged=len(results) - approved,
        check_failures=dict(failures),
    )

    logger.info(f"Validation complete: {summary.approved} approved, {summary.flagged} flagged")

    return results, summary


# ============================================================================
# Text Reports
# ============================================================================

def format_result_text(result: ValidationResult) -> str:
    """
    Format a ValidationResult as human-readable text for CLI output.

    Args:
        result: ValidationResult to format

    Returns:
        Formatted string for display
    """
    lines = [
        "=" * 50,
        f"VERDICT: {result.verdict.value}",
        "=" * 50,
        f"Validated at: {result.validated_at.isoformat()}",
        f"Budget item:  {result.checks.budget_item}",
        "",
        "Checks:",
        "-" * 40,
    ]

    for name in CheckName:
        status = "PASS" if getattr(result.checks, name.value) else "FAIL"
        lines.append(f"  [{status}] {name.value}")
    lines.append("")

    if result.discrepancies:
        lines.append("Discrepancies:")
        lines.append("-" * 40)
        for i, discrepancy in enumerate(result.discrepancies, start=1):
            lines.append(f"  {i}. {discrepancy}")
        lines.append("")

    lines.append("=" * 50)

    return "\n".join(lines)


def format_summary_text(summary: ValidationSummary) -> str:
    """Format a ValidationSummary for CLI output."""
    lines = [
        "=" * 50,
        "VALIDATION SUMMARY",
        "=" * 50,
        f"Document sets validated: {summary.total}",
        f"Approved:                {summary.approved}",
        f"Flagged:                 {summary.flagged}",
        "",
    ]

    if summary.check_failures:
        lines.append("Failed checks:")
        lines.append("-" * 40)
        for check, count in sorted(summary.check_failures.items(), key=lambda x: -x[1]):
            lines.append(f"  {check}: {count}")
        lines.append("")

    lines.append("=" * 50)

    return "\n".join(lines)
