"""Opinion bisection - split participants into two groups by mean vote sign

Each participant's mean vote runs over every statement, with no recorded
vote counted as 0. Mean >= 0 goes to group 0, mean < 0 to group 1, so a
participant with no decisive votes lands in group 0.

This is a fixed sign threshold, not k-means: it always yields exactly two
groups. avg_agreement is a per-group placeholder constant, not a statistic
over members' votes.
"""

from typing import List, Optional

import numpy as np

from consensus.models import OpinionCluster, VoteMatrix

N_CLUSTERS = 2

LEANING_AGREE_CLUSTER = 0
LEANING_DISAGREE_CLUSTER = 1

# Placeholder group agreement, reported only for non-empty groups
CLUSTER_AVG_AGREEMENT = {
    LEANING_AGREE_CLUSTER: 0.7,
    LEANING_DISAGREE_CLUSTER: 0.3,
}


def participant_means(matrix: VoteMatrix, dense: Optional[np.ndarray] = None) -> np.ndarray:
    """Mean vote per participant across all statements (0 with no statements)."""
    if matrix.n_statements == 0:
        return np.zeros(matrix.n_participants)

    if dense is None:
        dense = matrix.to_array()
    return np.nan_to_num(dense, nan=0.0).mean(axis=1)


def bisect_participants(
    matrix: VoteMatrix,
    dense: Optional[np.ndarray] = None,
) -> List[OpinionCluster]:
    """Partition participants into the two opinion groups.

    Returns:
        Exactly two clusters, id 0 then id 1, members in the matrix's
        participant order. Either may be empty.
    """
    means = participant_means(matrix, dense)
    members = {LEANING_AGREE_CLUSTER: [], LEANING_DISAGREE_CLUSTER: []}

    for uid, mean in zip(matrix.user_ids, means):
        cluster_id = LEANING_AGREE_CLUSTER if mean >= 0 else LEANING_DISAGREE_CLUSTER
        members[cluster_id].append(uid)

    return [
        OpinionCluster(
            id=cluster_id,
            member_count=len(member_ids),
            member_ids=member_ids,
            avg_agreement=CLUSTER_AVG_AGREEMENT[cluster_id] if member_ids else 0.0,
        )
        for cluster_id, member_ids in members.items()
    ]


def count_clusters(clusters: List[OpinionCluster]) -> int:
    """N_CLUSTERS if anyone was placed, else 0."""
    return N_CLUSTERS if any(c.member_count > 0 for c in clusters) else 0
