"""
Tests for the consensus analysis entry points

End-to-end scenarios through analyze_consensus (text in, text out) and
analyze_votes (in-memory), plus determinism and silent degradation.
"""

import json

import pytest

from consensus import analyze_consensus, analyze_votes
from consensus.models import ConsensusResult, Vote


def _run(votes):
    """Analyze a list of (user, statement, value) triples through the text boundary"""
    payload = json.dumps(
        [{"user_id": u, "statement_id": s, "value": v} for u, s, v in votes]
    )
    return json.loads(analyze_consensus(payload))


class TestScenarios:
    """Reference scenarios"""

    def test_empty_input(self):
        """No votes: zero participants, zero clusters, two empty groups"""
        result = json.loads(analyze_consensus([]))
        assert result == {
            "statements": [],
            "total_participants": 0,
            "cluster_count": 0,
            "clusters": [
                {"id": 0, "member_count": 0, "member_ids": [], "avg_agreement": 0.0},
                {"id": 1, "member_count": 0, "member_ids": [], "avg_agreement": 0.0},
            ],
        }

    def test_unanimous_agreement(self):
        """Two agrees on one statement"""
        result = _run([("u1", "s1", 1), ("u2", "s1", 1)])
        assert result["statements"] == [{
            "statement_id": "s1",
            "agree_count": 2,
            "disagree_count": 0,
            "pass_count": 0,
            "total_voters": 2,
            "agreement_ratio": 1.0,
            "divisiveness": 0.0,
        }]
        assert result["total_participants"] == 2
        assert result["cluster_count"] == 2
        assert result["clusters"][0]["member_count"] == 2
        assert result["clusters"][0]["avg_agreement"] == 0.7
        assert result["clusters"][1]["member_count"] == 0

    def test_perfect_split(self):
        """One agree, one disagree"""
        result = _run([("u1", "s1", 1), ("u2", "s1", -1)])
        statement = result["statements"][0]
        assert statement["agreement_ratio"] == 0.5
        assert statement["divisiveness"] == 1.0
        assert result["clusters"][0]["member_ids"] == ["u1"]
        assert result["clusters"][1]["member_ids"] == ["u2"]

    def test_statement_answered_by_minority(self):
        """Five participants, one agrees on s1, the rest never saw it"""
        result = _run([
            ("u1", "s1", 1),
            ("u2", "s2", 1),
            ("u3", "s2", -1),
            ("u4", "s2", 0),
            ("u5", "s2", 1),
        ])
        s1 = result["statements"][0]
        assert s1["statement_id"] == "s1"
        assert s1["agree_count"] == 1
        assert s1["disagree_count"] == 0
        assert s1["pass_count"] == 4
        assert s1["total_voters"] == 5
        assert s1["agreement_ratio"] == 1.0

    def test_last_write_wins(self):
        """A changed vote replaces the earlier one"""
        result = _run([("u1", "s1", 1), ("u1", "s1", -1)])
        s1 = result["statements"][0]
        assert (s1["agree_count"], s1["disagree_count"]) == (0, 1)
        assert result["clusters"][1]["member_ids"] == ["u1"]


class TestDegradation:
    """Bad input never raises"""

    @pytest.mark.parametrize(
        "payload",
        [
            "garbage",
            "{}",
            "null",
            b"\x80\x81",
            "[1, 2, 3]",
            "[" * 200000 + "]" * 200000,
            '[{"user_id": "u1", "statement_id": "s1", "value": ' + "9" * 5000 + "}]",
            '[{"user_id": "\\ud800", "statement_id": "s1", "value": 1}]',
        ],
    )
    def test_malformed_payload_is_empty_result(self, payload):
        """Unreadable payloads analyze as empty"""
        result = json.loads(analyze_consensus(payload))
        assert result["total_participants"] == 0
        assert result["statements"] == []
        assert result["cluster_count"] == 0
        assert len(result["clusters"]) == 2

    def test_well_formed_subset_survives(self):
        """Malformed records are dropped, good ones analyzed"""
        payload = json.dumps([
            {"user_id": "u1", "statement_id": "s1", "value": 1},
            {"user_id": "u2", "statement_id": "s1"},
            {"user_id": "u3", "value": -1},
            "junk",
        ])
        result = json.loads(analyze_consensus(payload))
        assert result["total_participants"] == 1
        assert result["statements"][0]["agree_count"] == 1


class TestDeterminism:
    """Output is a pure function of the input sequence"""

    VOTES = [
        ("carol", "s3", -1), ("alice", "s1", 1), ("bob", "s2", -1),
        ("alice", "s3", 1), ("dave", "s1", 0), ("bob", "s1", -1),
    ]

    def test_repeated_calls_byte_identical(self):
        """Same input, same bytes"""
        payload = json.dumps(
            [{"user_id": u, "statement_id": s, "value": v} for u, s, v in self.VOTES]
        )
        outputs = {analyze_consensus(payload) for _ in range(5)}
        assert len(outputs) == 1

    def test_canonical_first_seen_order(self):
        """Statements and cluster members follow first appearance"""
        result = _run(self.VOTES)
        assert [s["statement_id"] for s in result["statements"]] == ["s3", "s1", "s2"]
        assert result["clusters"][0]["member_ids"] == ["alice", "dave"]
        assert result["clusters"][1]["member_ids"] == ["carol", "bob"]

    def test_partition_complete(self):
        """Group sizes add up to the participant count"""
        result = _run(self.VOTES)
        zero, one = result["clusters"]
        assert zero["member_count"] + one["member_count"] == result["total_participants"] == 4


class TestAnalyzeVotes:
    """In-memory entry point"""

    def test_accepts_vote_objects_and_mappings(self):
        """Vote models and plain dicts mix freely"""
        result = analyze_votes([
            Vote(user_id="u1", statement_id="s1", value=1),
            {"user_id": "u2", "statement_id": "s1", "value": -1},
        ])
        assert isinstance(result, ConsensusResult)
        assert result.total_participants == 2
        assert result.statements[0].divisiveness == 1.0

    def test_client_projection(self):
        """camelCase projection carries the same numbers"""
        result = analyze_votes([{"user_id": "u1", "statement_id": "s1", "value": 1}])
        client = result.to_client_dict()
        assert client["totalParticipants"] == 1
        assert client["clusterCount"] == 2
        assert client["statements"][0] == {
            "statementId": "s1",
            "agreeCount": 1,
            "disagreeCount": 0,
            "passCount": 0,
            "totalVoters": 1,
            "agreementRatio": 1.0,
            "divisiveness": 0.0,
        }
        assert client["clusters"][0] == {
            "id": 0,
            "memberCount": 1,
            "memberIds": ["u1"],
            "avgAgreement": 0.7,
        }
