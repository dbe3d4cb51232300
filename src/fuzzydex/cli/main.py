"""Command-line interface for fuzzydex.

Provides CLI commands for edit distance and multi-attribute fuzzy lookup.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("fuzzydex")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.2.0"  # Fallback for development


def _parse_pairs(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    """Split repeated ``name=value`` option values."""
    pairs: list[tuple[str, str]] = []
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint=option)
        pairs.append((name, rest))
    return pairs


@click.group()
@click.version_option(version=__version__, prog_name="fuzzydex")
def cli() -> None:
    """Approximate multi-attribute lookup for in-memory datasets.

    Use 'fuzzydex COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("source")
@click.argument("target")
@click.option(
    "--matrix",
    is_flag=True,
    help="Use the full-table reference implementation",
)
def distance(source: str, target: str, matrix: bool) -> None:
    """Print the Levenshtein distance between SOURCE and TARGET.

    Examples
    --------
        fuzzydex distance kitten sitting
    """
    from fuzzydex.metrics import levenshtein, levenshtein_matrix

    metric = levenshtein_matrix if matrix else levenshtein
    click.echo(str(metric(source, target)))


@cli.command()
@click.argument("facts_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--match",
    "-m",
    "matches",
    multiple=True,
    required=True,
    help="Lookup as DIMENSION=KEY (repeatable, resolved in order)",
)
@click.option(
    "--weight",
    "-w",
    "weights",
    multiple=True,
    help="Dimension weight as DIMENSION=WEIGHT (repeatable, default: 1.0)",
)
@click.option(
    "--mode",
    type=click.Choice(["exact", "nearest", "ranked"]),
    default="ranked",
    help="Resolution mode (default: ranked)",
)
@click.option(
    "--threshold",
    type=float,
    default=None,
    help="Combined score cut-off for ranked mode (default: no cut-off)",
)
@click.option(
    "--tolerance",
    type=int,
    default=6,
    help="Maximum edit distance per dimension (default: 6)",
)
@click.option(
    "--bucketed",
    is_flag=True,
    help="Use bucketed indexes instead of full scans",
)
@click.option(
    "--limit",
    "-n",
    type=int,
    default=10,
    help="Maximum results to print (default: 10)",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write structured JSONL events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def query(
    facts_path: str,
    matches: tuple[str, ...],
    weights: tuple[str, ...],
    mode: str,
    threshold: float | None,
    tolerance: int,
    bucketed: bool,
    limit: int,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Look up facts in FACTS_PATH by one or more attributes.

    FACTS_PATH is a JSONL file with one {"fact": ..., "attributes": {...}}
    object per line. Every attribute name becomes a dimension. Results are
    printed as SCORE<TAB>FACT, best first.

    Examples
    --------
        fuzzydex query people.jsonl -m first=alpha -m last=lincon
        fuzzydex query people.jsonl -m last=lincoln -w last=2 --mode exact
    """
    from fuzzydex.api import build_index, load_facts, search
    from fuzzydex.audit import AuditLogger
    from fuzzydex.multidex import MultidexConfig

    match_pairs = _parse_pairs(matches, "--match")
    lookups = dict(match_pairs)
    if len(lookups) != len(match_pairs):
        raise click.BadParameter("each dimension may be matched only once", param_hint="--match")

    try:
        weight_map = {name: float(w) for name, w in _parse_pairs(weights, "--weight")}
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--weight") from e

    logger = AuditLogger.start(Path(audit_log)) if audit_log else None

    try:
        entities = load_facts(facts_path)

        dimensions: dict[str, float] = {}
        for entity in entities:
            for attribute in entity.attributes() + entity.aliases():
                dimensions.setdefault(attribute.name, 1.0)
        dimensions.update(weight_map)

        if verbose:
            click.echo(f"Loaded {len(entities)} facts from {facts_path}", err=True)
            for name, weight in dimensions.items():
                click.echo(f"  Dimension {name} (weight {weight:g})", err=True)

        config = MultidexConfig(
            index_type="bucketed" if bucketed else "levenshtein",
            default_tolerance=tolerance,
        )
        multidex = build_index(entities, dimensions, config=config, audit_logger=logger)
        results = search(multidex, lookups, mode=mode, threshold=threshold)

        if verbose:
            click.echo(f"Found {len(results)} results", err=True)

        for element in list(results)[:limit]:
            click.echo(f"{element.score:g}\t{element.item}")

        if not results:
            click.secho("No matches", fg="yellow", err=True)

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)
    finally:
        if logger is not None:
            logger.close()


if __name__ == "__main__":
    cli()
