"""Consensus module - vote aggregation and opinion grouping

Stateless analysis over agree/disagree/pass votes on statements:
- Vote matrix construction (last write wins per participant and statement)
- Per-statement agreement ratio and divisiveness
- Two-way opinion grouping by mean vote sign
"""

from consensus.engine import analyze_consensus, analyze_votes
from consensus.ingestion import build_vote_matrix, decode_votes, parse_votes
from consensus.models import (
    ConsensusResult,
    OpinionCluster,
    StatementConsensus,
    Vote,
    VoteMatrix,
)

__all__ = [
    "analyze_consensus",
    "analyze_votes",
    "build_vote_matrix",
    "decode_votes",
    "parse_votes",
    "ConsensusResult",
    "OpinionCluster",
    "StatementConsensus",
    "Vote",
    "VoteMatrix",
]
