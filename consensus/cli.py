"""Command-line host for the consensus kernel

    consensus-kernel analyze votes.json --indent 2
    cat votes.json | consensus-kernel analyze - --case camel
    consensus-kernel summary votes.json
"""

import json
import sys

import click

from config import get_logger
from consensus.engine import analyze_votes
from consensus.ingestion import decode_votes, parse_votes
from exceptions import VotePayloadError

logger = get_logger(__name__).bind(component="consensus_cli")


def _load_votes(payload_file, strict: bool):
    payload = payload_file.read()
    if strict:
        return decode_votes(payload)
    return parse_votes(payload)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """Consensus analysis over agree/disagree/pass votes"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("analyze")
@click.argument("payload_file", type=click.File("rb"), default="-")
@click.option("--indent", type=click.IntRange(min=0), default=None, help="Pretty-print with N spaces")
@click.option(
    "--case",
    type=click.Choice(["snake", "camel"]),
    default="snake",
    show_default=True,
    help="Key style of the result",
)
@click.option("--strict", is_flag=True, help="Fail on an undecodable payload instead of analyzing it as empty")
def analyze(payload_file, indent, case, strict):
    """Analyze a JSON vote array and print the result JSON"""
    try:
        votes = _load_votes(payload_file, strict)
    except VotePayloadError as e:
        logger.error("rejected vote payload", reason=e.reason)
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    result = analyze_votes(votes)

    if case == "camel":
        click.echo(json.dumps(result.to_client_dict(), indent=indent))
    else:
        click.echo(result.model_dump_json(indent=indent))


@cli.command("summary")
@click.argument("payload_file", type=click.File("rb"), default="-")
def summary(payload_file):
    """Print a readable table of statement tallies and group sizes"""
    result = analyze_votes(parse_votes(payload_file.read()))

    click.echo(f"Participants: {result.total_participants}")
    for s in result.statements:
        click.echo(
            f"  {s.statement_id}  {s.agree_count}/{s.disagree_count}/{s.pass_count}"
            f"  ratio={s.agreement_ratio:.2f}  divisiveness={s.divisiveness:.2f}"
        )
    for c in result.clusters:
        click.echo(f"Group {c.id}: {c.member_count} members")


def main():
    """Entry point for the consensus-kernel console script"""
    cli(prog_name="consensus-kernel")


if __name__ == "__main__":
    main()
