"""
Command-line interface for the Payment Resolution QC Service.

Provides three commands:
- validate: Cross-validate document sets from a JSON file and write a report
- rules: List the validation rules
- version: Show version information
"""

import json
from pathlib import Path
from typing import Optional

import typer

from .boundary import DocumentSchemaError, load_documents
from .config import logger
from .rules import VALIDATION_RULES
from .validator import NullObserver, format_result_text, format_summary_text, validate_batch


# Create Typer app
app = typer.Typer(
    name="resolution-qc",
    help="Payment Resolution Quality Control CLI",
    add_completion=False,
)


@app.command()
def validate(
    input_file: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="JSON file with one document set or a list of document sets",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help="Write the validation results to this JSON file",
    ),
    fail_on_flagged: bool = typer.Option(
        False,
        "--fail-on-flagged",
        help="Exit with non-zero status if any document set is flagged",
    ),
) -> None:
    """
    Cross-validate invoice, purchase order and receipt data.

    Reads extracted document sets, runs every rule on each, prints the
    verdicts and optionally writes the full results as JSON.
    """
    typer.echo(f"Validating document sets from: {input_file}")

    try:
        document_sets = load_documents(input_file)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in input file: {e}", err=True)
        raise typer.Exit(code=1)
    except DocumentSchemaError as e:
        typer.echo("Error: Input does not match the document set schema:", err=True)
        for issue in e.issues:
            typer.echo(f"  - {issue}", err=True)
        raise typer.Exit(code=1)

    if not document_sets:
        typer.echo("No document sets found in input file.", err=True)
        raise typer.Exit(code=1)

    try:
        results, summary = validate_batch(document_sets, observer=NullObserver())
    except Exception as e:
        typer.echo(f"Error during validation: {e}", err=True)
        logger.exception("Validation failed")
        raise typer.Exit(code=1)

    for result in results:
        typer.echo("\n" + format_result_text(result))

    if len(results) > 1:
        typer.echo("\n" + format_summary_text(summary))

    if report:
        with open(report, 'w', encoding='utf-8') as f:
            json.dump([r.model_dump(mode="json") for r in results], f, indent=2, ensure_ascii=False)
        typer.echo(f"\n[OK] Validation report saved to: {report}")

    if fail_on_flagged and summary.flagged > 0:
        raise typer.Exit(code=1)


@app.command()
def rules() -> None:
    """List the validation rules in execution order."""
    for rule in VALIDATION_RULES:
        checks = ", ".join(check.value for check in rule.checks)
        typer.echo(f"{rule.name}: {rule.description} [{checks}]")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    typer.echo(f"Payment Resolution QC v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
