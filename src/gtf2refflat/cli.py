"""Command-line interface for gtf2refflat.

This module provides the main entry point for the gtf2refflat CLI tool.
It uses Click to define commands and rich for console output.

Commands:
    convert: Convert a GTF annotation into a RefFlat file

Example:
    $ gtf2refflat --help
    $ gtf2refflat convert -g annotation.gtf
    $ gtf2refflat -v convert -g annotation.gtf -o refflat/ --sort-by-transcript
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from gtf2refflat import __version__

# Initialize rich console for pretty output
console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="gtf2refflat")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write debug logs to this file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool, log_file: Optional[Path]) -> None:
    """gtf2refflat: Convert GTF gene annotations into RefFlat tables.

    The RefFlat output describes each transcript's exon and CDS boundaries
    and can be passed to RNA-seq metrics tools such as CollectRnaSeqMetrics.
    """
    from gtf2refflat.utils.logging import setup_logging

    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    verbosity = 0 if quiet else 2 if verbose else 1
    setup_logging(verbosity=verbosity, log_file=log_file)


# =============================================================================
# convert command
# =============================================================================


@main.command()
@click.option(
    "--gtf",
    "-g",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Gene annotations in GTF form (tab separated).",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the .gff3 and .refflat files [default: next to the GTF].",
)
@click.option(
    "--sort-by-transcript",
    is_flag=True,
    help="Regroup features by transcript_id before conversion (for interleaved GTFs).",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML or YAML configuration file.",
)
@click.pass_context
def convert(
    ctx: click.Context,
    gtf: Path,
    output_dir: Optional[Path],
    sort_by_transcript: bool,
    config_path: Optional[Path],
) -> None:
    """Convert a GTF file into a RefFlat file.

    Features are grouped by transcript_id; the features of one transcript
    must be contiguous unless --sort-by-transcript is given. Transcripts
    whose features disagree on strand, or that have an unstranded (.)
    feature, are reported and dropped.

    \b
    Outputs (same base name as the GTF):
    - <gtf>.gff3: intermediate file with normalized attributes
    - <gtf>.refflat: one RefFlat row per transcript

    \b
    Examples:
        $ gtf2refflat convert -g genes.gtf
        $ gtf2refflat convert -g genes.gtf -o out/ --sort-by-transcript
    """
    from gtf2refflat.config import Config
    from gtf2refflat.core.pipeline import run_conversion
    from gtf2refflat.exceptions import GtfToRefFlatFailure

    verbose = ctx.obj.get("verbose", False)
    quiet = ctx.obj.get("quiet", False)

    try:
        config = Config.load(config_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    config = config.evolve(output_dir=output_dir, sort_by_transcript=sort_by_transcript or None)

    if not quiet:
        console.print(f"[blue]Converting:[/blue] {gtf}")

    try:
        result = run_conversion(gtf, config)
    except GtfToRefFlatFailure as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"  Cause: {e.cause}")
        if verbose:
            import traceback

            traceback.print_exception(e.__cause__ or e.cause)
        raise SystemExit(1)

    if not quiet:
        console.print(f"[green]Wrote normalized GTF to:[/green] {result.normalized_path}")
        console.print(f"[green]Wrote {result.n_rows} RefFlat rows to:[/green] {result.refflat_path}")
        if result.conflicts:
            console.print(
                f"[yellow]Dropped {len(result.conflicts)} transcript(s) with strand conflicts:[/yellow] "
                + ", ".join(result.conflicts)
            )
        if result.unstranded:
            console.print(
                f"[yellow]Dropped {len(result.unstranded)} unstranded transcript(s):[/yellow] "
                + ", ".join(result.unstranded)
            )


if __name__ == "__main__":
    main()
