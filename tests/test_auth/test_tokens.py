"""Tests for StaticTokenVerifier."""

from __future__ import annotations

from tasklist.auth.tokens import StaticTokenVerifier
from tasklist.protocols.identity import TokenVerifier


class TestStaticTokenVerifier:
    def test_protocol_compliance(self) -> None:
        assert isinstance(StaticTokenVerifier(), TokenVerifier)

    def test_seeded_tokens(self) -> None:
        verifier = StaticTokenVerifier({"abc": 3})
        assert verifier.verify("abc") == 3
        assert verifier.verify("xyz") is None

    def test_issue_returns_unique_tokens(self) -> None:
        verifier = StaticTokenVerifier()
        first = verifier.issue(1)
        second = verifier.issue(1)
        assert first != second
        assert verifier.verify(first) == 1
        assert verifier.verify(second) == 1

    def test_revoke(self) -> None:
        verifier = StaticTokenVerifier()
        token = verifier.issue(5)
        assert verifier.revoke(token) is True
        assert verifier.verify(token) is None
        assert verifier.revoke(token) is False

    def test_seed_mapping_is_copied(self) -> None:
        seed = {"abc": 1}
        verifier = StaticTokenVerifier(seed)
        seed["def"] = 2
        assert verifier.verify("def") is None

    def test_repr(self) -> None:
        assert "tokens=1" in repr(StaticTokenVerifier({"a": 1}))
