"""
Consensus data model - votes in, per-statement tallies and opinion groups out

Wire models are pydantic so the parse boundary and the JSON result share one
schema. The vote matrix is a plain dataclass: it lives for one analysis call
and never crosses the wire.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr

AGREE = 1
DISAGREE = -1
PASS = 0

VALID_VOTE_VALUES = frozenset({AGREE, DISAGREE, PASS})


class Vote(BaseModel):
    """One participant's stance on one statement

    value: 1 = agree, -1 = disagree, 0 = pass. Other integers are accepted
    and counted as pass.
    """

    model_config = ConfigDict(frozen=True)

    user_id: StrictStr
    statement_id: StrictStr
    value: StrictInt


class StatementConsensus(BaseModel):
    statement_id: str
    agree_count: int
    disagree_count: int
    pass_count: int
    # Always the full participant population, not just those who voted here
    total_voters: int
    agreement_ratio: float
    divisiveness: float

    def to_client_dict(self) -> Dict[str, Any]:
        return {
            "statementId": self.statement_id,
            "agreeCount": self.agree_count,
            "disagreeCount": self.disagree_count,
            "passCount": self.pass_count,
            "totalVoters": self.total_voters,
            "agreementRatio": self.agreement_ratio,
            "divisiveness": self.divisiveness,
        }


class OpinionCluster(BaseModel):
    id: int
    member_count: int
    member_ids: List[str]
    avg_agreement: float

    def to_client_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "memberCount": self.member_count,
            "memberIds": list(self.member_ids),
            "avgAgreement": self.avg_agreement,
        }


class ConsensusResult(BaseModel):
    statements: List[StatementConsensus]
    total_participants: int
    cluster_count: int
    clusters: List[OpinionCluster]

    def to_client_dict(self) -> Dict[str, Any]:
        """camelCase projection consumed by browser clients"""
        return {
            "statements": [s.to_client_dict() for s in self.statements],
            "totalParticipants": self.total_participants,
            "clusterCount": self.cluster_count,
            "clusters": [c.to_client_dict() for c in self.clusters],
        }


@dataclass
class VoteMatrix:
    """Sparse participant x statement record of the latest vote per pair

    votes: {user_id: {statement_id: value}}; a missing key means no vote.
    user_ids / statement_ids: canonical order (first appearance in input).

    Built once per analysis and treated as read-only afterwards.
    """

    votes: Dict[str, Dict[str, int]] = field(default_factory=dict)
    user_ids: List[str] = field(default_factory=list)
    statement_ids: List[str] = field(default_factory=list)

    @property
    def n_participants(self) -> int:
        return len(self.user_ids)

    @property
    def n_statements(self) -> int:
        return len(self.statement_ids)

    def get(self, user_id: str, statement_id: str) -> Optional[int]:
        return self.votes.get(user_id, {}).get(statement_id)

    def to_array(self) -> np.ndarray:
        """Dense view, shape (n_participants, n_statements)

        NaN marks no recorded vote. Values outside {-1, 0, 1} are stored as 0
        since every consumer treats them as a pass.
        """
        dense = np.full((self.n_participants, self.n_statements), np.nan)
        column = {sid: j for j, sid in enumerate(self.statement_ids)}

        for i, uid in enumerate(self.user_ids):
            for sid, value in self.votes.get(uid, {}).items():
                dense[i, column[sid]] = value if value in VALID_VOTE_VALUES else PASS

        return dense
