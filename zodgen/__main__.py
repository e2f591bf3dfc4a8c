"""Entry point: python -m zodgen

Reads an OpenAPI JSON document and writes Zod schemas to an output directory.
"""

from __future__ import annotations

import logging
import sys

import click

from .codegen import DEFAULT_OUTPUT_DIR, write_artifacts
from .generator import generate_artifacts
from .loader import DEFAULT_DOCUMENT_PATH, DocumentError, load_document


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="zodgen")
@click.option(
    "-file",
    "--file",
    "document_path",
    default=str(DEFAULT_DOCUMENT_PATH),
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to OpenAPI JSON document",
)
@click.option(
    "-output",
    "--output",
    "output_dir",
    default=str(DEFAULT_OUTPUT_DIR),
    show_default=True,
    type=click.Path(path_type=str),
    help="Output directory path (replaced on every run)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every generated file.")
def cli(document_path: str, output_dir: str, verbose: bool) -> None:
    """Generate Zod schemas from an OpenAPI document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    click.echo(f"Reading {document_path}...")
    document = load_document(document_path)

    click.echo("Generating Zod schemas...")
    artifacts = generate_artifacts(document)
    summary = write_artifacts(artifacts, output_dir)

    click.echo(f"Successfully generated {summary.file_count} files")
    click.echo(f"   - Operation endpoints: {summary.operation_count}")
    click.echo(f"   - Component schemas: {summary.component_count}")
    click.echo(f"   - Total directories: {summary.directory_count}")
    if summary.sample_operations:
        samples = ", ".join(f"{output_dir}/{name}/" for name in summary.sample_operations)
        click.echo(f"   - Sample operations: {samples}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except (DocumentError, OSError) as exc:
        click.echo(f"Error generating schemas: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
