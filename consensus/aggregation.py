"""Statement consensus aggregation

Tallies every statement over the whole participant population:
- agree: recorded value 1
- disagree: recorded value -1
- pass: anything else, including no recorded vote

Agreement ratio and divisiveness come from decisive votes only
(agree + disagree). Both are 0 when nobody took a side, so an untouched
statement reads as settled rather than contested.
"""

from typing import List, Optional

import numpy as np

from consensus.models import AGREE, DISAGREE, StatementConsensus, VoteMatrix


def compute_statement_consensus(
    matrix: VoteMatrix,
    dense: Optional[np.ndarray] = None,
) -> List[StatementConsensus]:
    """Compute per-statement tallies, in the matrix's statement order.

    Args:
        matrix: Vote matrix for this analysis
        dense: matrix.to_array(), when the caller already built it

    Returns:
        One StatementConsensus per statement
    """
    if dense is None:
        dense = matrix.to_array()
    total = matrix.n_participants

    # NaN compares unequal to everything, so unvoted cells fall through to pass
    agrees = np.sum(dense == AGREE, axis=0)
    disagrees = np.sum(dense == DISAGREE, axis=0)

    results = []
    for j, sid in enumerate(matrix.statement_ids):
        agree = int(agrees[j])
        disagree = int(disagrees[j])
        agreement_ratio, divisiveness = _ratio_and_divisiveness(agree, disagree)

        results.append(
            StatementConsensus(
                statement_id=sid,
                agree_count=agree,
                disagree_count=disagree,
                pass_count=total - agree - disagree,
                total_voters=total,
                agreement_ratio=agreement_ratio,
                divisiveness=divisiveness,
            )
        )

    return results


def _ratio_and_divisiveness(agree: int, disagree: int) -> tuple[float, float]:
    """Agreement ratio over decisive votes, and distance from unanimity.

    divisiveness = 1 - |ratio - 0.5| * 2: 1.0 is a perfect split, 0.0 unanimous.
    """
    decisive = agree + disagree
    if decisive == 0:
        return 0.0, 0.0

    ratio = agree / decisive
    return ratio, 1.0 - abs(ratio - 0.5) * 2.0
