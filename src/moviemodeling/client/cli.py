"""Command-line interface for moviemodeling using Click."""

import logging
import os

import click
from dotenv import load_dotenv

from moviemodeling.client.api_client import DataModelingApiClient
from moviemodeling.client.cli_helpers import (
    ensure_database_exists,
    format_benchmark,
    format_diagnostics,
    format_document,
    get_model_counts,
)
from moviemodeling.constants import DEFAULT_SEED_MOVIE_COUNT, MODEL_NAMES
from moviemodeling.service.catalog import CatalogClient
from moviemodeling.service.database import (
    RavenDBConfig,
    RavenDocumentStore,
    create_document_store,
    database_exists,
    delete_database,
    wait_for_store,
)
from moviemodeling.service.errors import (
    InvalidInputError,
    MalformedResponseError,
    SeedingError,
    StoreUnavailableError,
)
from moviemodeling.service.modeling import BenchmarkAggregator, QueryRouter, Seeder

# Load environment variables
load_dotenv()
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def _open_store() -> RavenDocumentStore:
    store = create_document_store()
    return RavenDocumentStore(store, page_size=RavenDBConfig.get_page_size())


@click.command()
@click.option(
    "--count",
    "movie_count",
    type=click.IntRange(min=1),
    default=lambda: int(os.getenv("SEED_MOVIE_COUNT", str(DEFAULT_SEED_MOVIE_COUNT))),
    show_default="SEED_MOVIE_COUNT or 5",
    help="Number of movies to fetch from the media catalog",
)
@click.option("--skip", type=click.IntRange(min=0), default=0, help="Movies to skip in the catalog")
@click.option(
    "--create-database",
    "create_database_flag",
    is_flag=True,
    default=False,
    help="Create the RavenDB database if it doesn't exist",
)
@click.option(
    "--wait/--no-wait",
    default=True,
    help="Wait for RavenDB to become reachable before seeding (default: wait)",
)
def seed(movie_count: int, skip: int, create_database_flag: bool, wait: bool) -> None:
    """Fetch movies from the media catalog and seed all four data models.

    Example:
        moviemodeling-seed
        moviemodeling-seed --count 20 --create-database
    """
    if wait and not wait_for_store():
        click.echo(f"✗ RavenDB is not reachable at {RavenDBConfig.get_url()}", err=True)
        raise click.Abort()

    ensure_database_exists(create_if_missing=create_database_flag)

    click.echo(f"Fetching {movie_count} movie(s) from the media catalog...")
    seeder = Seeder(_open_store(), fetcher=CatalogClient())
    try:
        report = seeder.seed_from_catalog(movie_count, skip=skip)
    except SeedingError as e:
        click.echo(f"✗ {e}", err=True)
        for model, counts in e.report.models.items():
            click.echo(
                f"  {model}: {counts.movie_documents} movie + "
                f"{counts.person_documents} person document(s) committed",
                err=True,
            )
        raise click.Abort()
    except (StoreUnavailableError, MalformedResponseError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        raise click.Abort()

    if report.movie_count == 0:
        click.echo("No movies returned, nothing to seed.")
        return

    click.echo(f"✓ Seeded {report.movie_count} movie(s):")
    for model, counts in report.models.items():
        click.echo(
            f"  {model:<10} {counts.movie_documents} movie + "
            f"{counts.person_documents} person document(s)"
        )


@click.command()
@click.argument("data_model", type=str)
@click.argument("search_value", type=str)
@click.option("--doc-id", type=str, default=None, help="Document id for a point read")
@click.option(
    "--search-type",
    type=click.Choice(["title", "person"]),
    default="title",
    help="Search titles, or actor/director names (Single model only)",
)
def search(data_model: str, search_value: str, doc_id: str | None, search_type: str) -> None:
    """Search DATA_MODEL for SEARCH_VALUE and show the request diagnostics.

    Example:
        moviemodeling-search Single "Dune" --doc-id 1234
        moviemodeling-search Single "zendaya" --search-type person
    """
    ensure_database_exists()

    try:
        router = QueryRouter(_open_store())
        response = router.query(data_model, search_value, search_type, doc_id)
    except InvalidInputError as e:
        click.echo(f"✗ Error: {e}", err=True)
        raise click.Abort()
    except (StoreUnavailableError, MalformedResponseError) as e:
        click.echo(f"✗ Connection error: {e}", err=True)
        click.echo("\nPlease ensure RavenDB is running.", err=True)
        raise click.Abort()

    if response is None:
        click.echo("No results found.")
        return

    click.echo(format_diagnostics(response.diagnostics))
    click.echo(f"\n✅ Found {len(response.results)} result(s):\n")
    for i, document in enumerate(response.results, 1):
        click.echo(format_document(i, document))


@click.command()
@click.argument("search_value", type=str)
@click.option("--doc-id", type=str, default=None, help="Document id for point reads")
@click.option(
    "--search-type",
    type=click.Choice(["title", "person"]),
    default="title",
    help="Search titles, or actor/director names (Single model only)",
)
@click.option("--iterations", type=click.IntRange(min=1), default=3, help="Runs per model")
@click.option(
    "--api-url",
    type=str,
    default=None,
    help="Query a running web API instead of RavenDB directly",
)
def bench(
    search_value: str,
    doc_id: str | None,
    search_type: str,
    iterations: int,
    api_url: str | None,
) -> None:
    """Run the same search against every data model and compare costs.

    Example:
        moviemodeling-bench "Dune"
        moviemodeling-bench "Dune" --doc-id 1234 --iterations 10
        moviemodeling-bench "zendaya" --search-type person --api-url http://localhost:5000
    """
    if api_url:
        client = DataModelingApiClient(api_url)

        def run(model: str) -> tuple[str, float] | None:
            payload = client.search(model, search_value, search_type, doc_id)
            if payload is None:
                return None
            diagnostics = payload["requestDiagnostics"]
            return diagnostics["query_type"], float(diagnostics["request_charge"])

    else:
        ensure_database_exists()
        router = QueryRouter(_open_store())

        def run(model: str) -> tuple[str, float] | None:
            response = router.query(model, search_value, search_type, doc_id)
            if response is None:
                return None
            return response.diagnostics.query_type, response.total_cost

    benchmark = BenchmarkAggregator()
    benchmark.subscribe(lambda _: click.echo(".", nl=False))

    for model in MODEL_NAMES:
        click.echo(f"{model:<10} ", nl=False)
        try:
            for _ in range(iterations):
                outcome = run(model)
                if outcome is None:
                    click.echo(" not found", nl=False)
                    break
                query_kind, cost = outcome
                benchmark.record(query_kind, cost, model)
        except InvalidInputError as e:
            click.echo(f"\n✗ Error: {e}", err=True)
            raise click.Abort()
        except (StoreUnavailableError, MalformedResponseError) as e:
            click.echo(f"\n✗ Connection error: {e}", err=True)
            raise click.Abort()
        click.echo()

    click.echo()
    click.echo(format_benchmark(benchmark.snapshot()))


@click.command()
def count() -> None:
    """Show the number of documents in each data model.

    Example:
        moviemodeling-count
    """
    ensure_database_exists()
    for model, doc_count in get_model_counts(MODEL_NAMES).items():
        if doc_count is None:
            click.echo(f"  {model:<10} ✗ error counting documents", err=True)
        else:
            click.echo(f"  {model:<10} {doc_count} document(s)")


@click.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompt")
def delete_db(yes: bool) -> None:
    """Delete the RavenDB database and every data model in it.

    Example:
        moviemodeling-delete-db          # Will prompt for confirmation
        moviemodeling-delete-db --yes    # Skip confirmation
    """
    url = RavenDBConfig.get_url()
    db_name = RavenDBConfig.get_database_name()

    if not database_exists():
        click.echo(f"✓ Database '{db_name}' does not exist at {url}")
        return

    if not yes:
        click.echo(f"⚠️  WARNING: You are about to delete the database '{db_name}'")
        click.echo(f"   Location: {url}\n")
        click.echo("This will permanently delete all four data models:")
        for model in MODEL_NAMES:
            click.echo(f"  • {model}")
        click.echo()

        if not click.confirm("Are you sure you want to proceed?", default=False):
            click.echo("Deletion cancelled.")
            return

    click.echo(f"🗑️  Deleting database '{db_name}'...")
    try:
        delete_database()
        click.echo(f"✓ Database '{db_name}' successfully deleted!")
        click.echo("\nTo seed it again, run:")
        click.echo("  moviemodeling-seed --create-database")
    except Exception as e:
        click.echo(f"✗ Error deleting database: {e}", err=True)
        raise click.Abort()


if __name__ == "__main__":
    seed()
