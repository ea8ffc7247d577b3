"""Helper functions for CLI commands."""

import click

from moviemodeling.constants import CONTENT_PREVIEW_LENGTH
from moviemodeling.service.database import (
    count_documents,
    create_database,
    database_exists,
)
from moviemodeling.service.modeling import BenchmarkSnapshot, RequestDiagnostics


def ensure_database_exists(create_if_missing: bool = False) -> bool:
    """Check if database exists, optionally create it.

    Args:
        create_if_missing: If True, attempt to create the database

    Returns:
        True if database exists (or was created)

    Raises:
        click.Abort: If database doesn't exist and can't be created
    """
    if database_exists():
        return True

    if create_if_missing:
        click.echo("Database does not exist. Creating database...")
        try:
            create_database()
            click.echo("✓ Database created successfully!")
            return True
        except Exception as e:
            click.echo(f"✗ Failed to create database: {e}", err=True)
            click.echo("\nPlease ensure RavenDB is running and accessible.", err=True)
            raise click.Abort()

    click.echo("✗ Error: Database does not exist!", err=True)
    click.echo("\nPlease create the database first using:", err=True)
    click.echo("  moviemodeling-seed --create-database", err=True)
    raise click.Abort()


def format_diagnostics(diagnostics: RequestDiagnostics) -> str:
    """Format request diagnostics for display."""
    lines = [
        f"Data model:    {diagnostics.data_model}",
        f"Query type:    {diagnostics.query_type}",
        f"Search value:  {diagnostics.submitted_search_value} -> "
        f"{diagnostics.formatted_search_value}",
    ]
    if diagnostics.doc_id:
        lines.append(f"Document id:   {diagnostics.doc_id}")
    if diagnostics.query_text:
        lines.append(f"Query text:    {diagnostics.query_text}")
    lines.append(f"Cost:          {diagnostics.request_charge}")
    lines.append(f"Activity id:   {diagnostics.activity_id}")
    return "\n".join(lines)


def format_document(index: int, document: dict, max_length: int = CONTENT_PREVIEW_LENGTH) -> str:
    """Format a result document for display.

    Args:
        index: Result number (1-based)
        document: Result document
        max_length: Maximum description length before truncation

    Returns:
        Formatted string for display
    """
    header = f"{index}. [{document.get('type', '?')}] {document.get('original_title', '')}"
    if document.get("year"):
        header += f" ({document['year']})"
    header += f"  id={document.get('id')}"

    lines = [header]
    description = document.get("description") or ""
    if description:
        if len(description) > max_length:
            description = description[:max_length] + "..."
        lines.append(f"   {description}")
    for role in document.get("roles", []):
        lines.append(f"   • {role.get('role_name')}: {role.get('movie_title')}")
    lines.append("")
    return "\n".join(lines)


def format_benchmark(snapshot: BenchmarkSnapshot) -> str:
    """Render the per-model cost table and totals."""
    kinds = list(next(iter(snapshot.model_costs.values()), {}).keys())
    lines = [f"{'Model':<12}" + "".join(f"{kind:>14}" for kind in kinds) + f"{'Total':>14}"]
    for model, costs in snapshot.model_costs.items():
        row = f"{model:<12}" + "".join(f"{costs[kind]:>14.2f}" for kind in kinds)
        lines.append(row + f"{sum(costs.values()):>14.2f}")
    lines.append("")
    lines.append(
        f"Point reads: {snapshot.point_reads}  SQL queries: {snapshot.sql_queries}  "
        f"Total cost: {snapshot.total_cost:.2f}"
    )
    return "\n".join(lines)


def get_model_counts(models: tuple[str, ...]) -> dict[str, int | None]:
    """Count documents per data model collection, None where counting failed."""
    counts: dict[str, int | None] = {}
    for model in models:
        try:
            counts[model] = count_documents(model)
        except Exception:
            counts[model] = None
    return counts
