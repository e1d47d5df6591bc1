"""Consensus analysis entry points

Pipeline: ingestion -> statement aggregation -> opinion bisection -> result.
Every call builds and discards its own matrix; nothing is shared between
calls, so concurrent callers need no coordination.
"""

from typing import Any, Iterable, Union

from config import get_logger
from consensus.aggregation import compute_statement_consensus
from consensus.bisection import bisect_participants, count_clusters
from consensus.ingestion import VotePayload, build_vote_matrix, coerce_votes, parse_votes
from consensus.models import ConsensusResult, Vote

logger = get_logger(__name__).bind(component="consensus_engine")


def analyze_votes(votes: Iterable[Union[Vote, Any]]) -> ConsensusResult:
    """Analyze consensus over votes already in memory.

    Args:
        votes: Vote objects or {user_id, statement_id, value} mappings.
               Malformed entries are dropped.

    Returns:
        ConsensusResult with per-statement tallies and two opinion groups
    """
    matrix = build_vote_matrix(coerce_votes(votes))

    dense = matrix.to_array()
    statements = compute_statement_consensus(matrix, dense)
    clusters = bisect_participants(matrix, dense)

    result = ConsensusResult(
        statements=statements,
        total_participants=matrix.n_participants,
        cluster_count=count_clusters(clusters),
        clusters=clusters,
    )

    log = logger.info if matrix.n_participants else logger.debug
    log(
        "analyzed consensus",
        n_participants=matrix.n_participants,
        n_statements=matrix.n_statements,
        cluster_sizes=[c.member_count for c in clusters],
    )

    return result


def analyze_consensus(payload: VotePayload) -> str:
    """Text boundary: vote payload in, result JSON out.

    Never raises on bad input. A payload that is not an array of records is
    analyzed as if it were empty.

    Args:
        payload: UTF-8 JSON array of votes (str or bytes), or a decoded list

    Returns:
        Compact JSON encoding of the ConsensusResult
    """
    return analyze_votes(parse_votes(payload)).model_dump_json()
