"""Vote ingestion - payload decoding and vote matrix construction

Two entry points into the same boundary:
- decode_votes(): strict, raises VotePayloadError on an undecodable payload
- parse_votes(): lenient, falls back to an empty vote list

Both drop individual malformed records instead of failing the batch.
"""

import json
from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError

from config import get_logger
from consensus.models import Vote, VoteMatrix
from exceptions import VotePayloadError

logger = get_logger(__name__).bind(component="consensus_ingestion")

VotePayload = Union[str, bytes, bytearray, List[Any]]


def decode_votes(payload: VotePayload) -> List[Vote]:
    """Decode a vote payload into well-formed Vote records.

    Args:
        payload: UTF-8 JSON text (str or bytes) encoding an array of
                 {user_id, statement_id, value} objects, or an already
                 decoded list of such objects

    Returns:
        Votes in input order, malformed records removed

    Raises:
        VotePayloadError: If the payload is not an array of records at all
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = bytes(payload).decode("utf-8")
        except UnicodeDecodeError as e:
            raise VotePayloadError("Vote payload is not UTF-8", reason="encoding", original_error=e)

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        # ValueError also covers oversized integer literals,
        # RecursionError covers pathologically nested arrays
        except (ValueError, RecursionError) as e:
            raise VotePayloadError("Vote payload is not JSON", reason="json", original_error=e)

    if not isinstance(payload, list):
        raise VotePayloadError(
            "Vote payload must be an array of vote records",
            reason="shape",
        )

    return coerce_votes(payload)


def parse_votes(payload: VotePayload) -> List[Vote]:
    """Lenient decode: an undecodable payload becomes an empty vote list."""
    try:
        return decode_votes(payload)
    except VotePayloadError as e:
        logger.warning("vote payload unreadable, treating as empty", reason=e.reason)
        return []


def coerce_votes(records: Iterable[Any]) -> List[Vote]:
    """Validate records into Votes, dropping the ones that do not fit.

    A record is kept when it is a Vote already, or a mapping with string
    user_id, string statement_id and integer value (booleans and floats are
    rejected). Identifiers must be UTF-8 encodable, so lone surrogates
    from JSON escapes like \\ud800 are dropped. Extra keys are ignored.
    """
    votes = []
    dropped = 0

    for record in records:
        if isinstance(record, Vote):
            vote = record
        elif isinstance(record, Mapping):
            try:
                vote = Vote.model_validate(dict(record))
            except ValidationError:
                dropped += 1
                continue
        else:
            dropped += 1
            continue

        if not _is_encodable(vote):
            dropped += 1
            continue
        votes.append(vote)

    if dropped:
        logger.debug("dropped malformed vote records", dropped=dropped, kept=len(votes))

    return votes


def _is_encodable(vote: Vote) -> bool:
    """Identifiers must survive UTF-8 encoding (no lone surrogates from \\ud800 escapes)."""
    try:
        vote.user_id.encode("utf-8")
        vote.statement_id.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def build_vote_matrix(votes: Iterable[Vote]) -> VoteMatrix:
    """Build the sparse vote matrix, last write wins per (user, statement).

    Participants and statements are ordered by first appearance so repeated
    runs over the same input produce identical output.
    """
    matrix = VoteMatrix()
    seen_statements = set()

    for vote in votes:
        row = matrix.votes.get(vote.user_id)
        if row is None:
            row = matrix.votes[vote.user_id] = {}
            matrix.user_ids.append(vote.user_id)

        if vote.statement_id not in seen_statements:
            seen_statements.add(vote.statement_id)
            matrix.statement_ids.append(vote.statement_id)

        row[vote.statement_id] = vote.value

    return matrix
