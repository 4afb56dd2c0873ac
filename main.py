import logging
from pathlib import Path

import typer

from talent_directory import FileError, ImporterFactory, TalentDirectoryError, TalentStore
from talent_directory.config import load_config
from talent_directory.export import export_dataset, generate_template
from talent_directory.database import EXPORTABLE_TABLES
from talent_directory.models import CohortRecord
from talent_directory.orchestrator import import_file, preview_file
from talent_directory.transformers import build_profile, list_profiles
from talent_directory.validators import parse_date

config = load_config()

app = typer.Typer(help="Admin console for the talent directory")

IMPORT_TYPES_HELP = ", ".join(ImporterFactory.get_available_types())


def check_import_type(value: str) -> str:
    """Resolve an import type argument against the importer registry"""
    try:
        return ImporterFactory.create(value).import_type
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.callback()
def main(
    log_level: str = typer.Option(config.log_level, help="Logging level"),
):
    """
    Manage candidates, imports and exports for the talent directory.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("import")
def import_data(
    import_type: str = typer.Argument(
        ..., help=f"One of: {IMPORT_TYPES_HELP}", callback=check_import_type
    ),
    source: str = typer.Argument(..., help="Path or http(s) URL of the CSV file"),
    db_path: str = typer.Option(config.db_path, help="Path to SQLite database file"),
):
    """
    Import a CSV file into the database.
    """
    try:
        importer = ImporterFactory.create(import_type)
        store = TalentStore(db_path)

        typer.echo(f"Importing {importer.label.lower()} from {source}...")

        summary = import_file(source, import_type, store, timeout=config.http_timeout)

    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)
    except FileError as e:
        typer.echo(f"❌ Error reading file: {e}", err=True)
        raise typer.Exit(1)
    except TalentDirectoryError as e:
        typer.echo(f"❌ Error importing data: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ {summary.message}")

    if summary.error_details:
        limit = config.error_display_limit
        typer.echo(f"⚠️  Found {summary.errors} errors:")
        for detail in summary.error_details[:limit]:
            typer.echo(f"  {detail}")

        if summary.errors > limit:
            typer.echo(f"  ... and {summary.errors - limit} more errors")


@app.command()
def preview(
    import_type: str = typer.Argument(
        ..., help=f"Import type to check columns against ({IMPORT_TYPES_HELP})",
        callback=check_import_type,
    ),
    source: str = typer.Argument(..., help="Path or http(s) URL of the CSV file"),
    limit: int = typer.Option(config.preview_rows, help="Number of rows to display"),
):
    """
    Show the first rows of a CSV file without importing it.
    """
    try:
        importer = ImporterFactory.create(import_type)
        rows = preview_file(source, limit=limit, timeout=config.http_timeout)
    except (ValueError, FileError) as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    if not rows:
        typer.echo("No data rows found.")
        return

    missing = importer.missing_columns(rows[0].keys())
    if missing:
        typer.echo(f"⚠️  Missing required columns: {', '.join(missing)}")

    for i, row in enumerate(rows, 1):
        typer.echo(f"Row {i}:")
        for column, value in row.items():
            typer.echo(f"  {column}: {value}")


@app.command("types")
def list_types():
    """
    List the import types and the columns each one reads.
    """
    for import_type, label in ImporterFactory.describe().items():
        importer = ImporterFactory.create(import_type)
        typer.echo(f"{import_type}: {label}")
        typer.echo(f"  required: {', '.join(importer.required_columns)}")
        typer.echo(f"  optional: {', '.join(importer.optional_columns)}")


@app.command()
def template(
    import_type: str = typer.Argument(
        ..., help=f"One of: {IMPORT_TYPES_HELP}", callback=check_import_type
    ),
    output_dir: Path = typer.Option(Path("."), help="Directory to write the template to"),
):
    """
    Write the CSV template for an import type.
    """
    try:
        template_file = generate_template(import_type)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    path = template_file.write(output_dir)
    typer.echo(f"✅ Template saved to: {path}")


@app.command()
def export(
    name: str = typer.Argument(..., help=f"One of: {', '.join(EXPORTABLE_TABLES)}"),
    output_dir: Path = typer.Option(Path("."), help="Directory to write the CSV to"),
    db_path: str = typer.Option(config.db_path, help="Path to SQLite database file"),
):
    """
    Export a table from the database to CSV.
    """
    try:
        store = TalentStore(db_path)
        export_file = export_dataset(store, name)
    except (ValueError, TalentDirectoryError) as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    if not export_file.csv:
        typer.echo(f"No {name} records to export.")
        return

    path = export_file.write(output_dir)
    typer.echo(f"✅ Exported {name} to: {path}")


@app.command("add-cohort")
def add_cohort(
    name: str = typer.Argument(..., help="Cohort name"),
    program: str = typer.Option(None, help="Program name"),
    start_date: str = typer.Option(None, help="Start date (YYYY-MM-DD)"),
    end_date: str = typer.Option(None, help="End date (YYYY-MM-DD)"),
    db_path: str = typer.Option(config.db_path, help="Path to SQLite database file"),
):
    """
    Create a cohort that candidates can be imported into.
    """
    try:
        store = TalentStore(db_path)
        cohort = store.create_cohort(
            CohortRecord(
                cohort_name=name,
                program_name=program,
                start_date=parse_date(start_date) if start_date else None,
                end_date=parse_date(end_date) if end_date else None,
            )
        )
    except (ValueError, TalentDirectoryError) as e:
        typer.echo(f"❌ Error creating cohort: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Created cohort {cohort.cohort_name} (id {cohort.id})")


@app.command()
def profile(
    candidate_id: int = typer.Argument(..., help="Candidate ID"),
    db_path: str = typer.Option(config.db_path, help="Path to SQLite database file"),
):
    """
    Display a candidate profile.
    """
    try:
        store = TalentStore(db_path)
        candidate_profile = build_profile(
            store, candidate_id, default_rating=config.default_rating
        )
    except TalentDirectoryError as e:
        typer.echo(f"❌ Error reading data: {e}", err=True)
        raise typer.Exit(1)

    if candidate_profile is None:
        typer.echo(f"❌ Candidate not found: {candidate_id}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Name: {candidate_profile.full_name}")
    typer.echo(f"Email: {candidate_profile.email}")
    typer.echo(f"Role: {candidate_profile.role}")
    typer.echo(f"Cohort: {candidate_profile.cohort.name} ({candidate_profile.cohort.program_name})")
    typer.echo(f"Overall Rating: {candidate_profile.overall_rating:.1f}/5.0")
    typer.echo("Skills:")
    for skill in candidate_profile.skills:
        marker = " (default)" if skill.is_default else ""
        typer.echo(f"  {skill.name}: {skill.level}/{skill.max_level}{marker}")
    typer.echo(f"Summary: {candidate_profile.summary}")


@app.command()
def directory(
    all_candidates: bool = typer.Option(
        False, "--all", help="Include candidates that are not public"
    ),
    db_path: str = typer.Option(config.db_path, help="Path to SQLite database file"),
):
    """
    List candidate profiles in the directory.
    """
    try:
        store = TalentStore(db_path)
        profiles = list_profiles(
            store, public_only=not all_candidates, default_rating=config.default_rating
        )
    except TalentDirectoryError as e:
        typer.echo(f"❌ Error reading data: {e}", err=True)
        raise typer.Exit(1)

    if not profiles:
        typer.echo("No candidates found.")
        return

    typer.echo("-" * 80)
    for candidate_profile in profiles:
        typer.echo(f"{candidate_profile.id}: {candidate_profile.full_name} <{candidate_profile.email}>")
        typer.echo(f"  Role: {candidate_profile.role}")
        typer.echo(f"  Cohort: {candidate_profile.cohort.name}")
        typer.echo(f"  Rating: {candidate_profile.overall_rating:.1f}/5.0")
        typer.echo("-" * 80)


if __name__ == "__main__":
    app()
