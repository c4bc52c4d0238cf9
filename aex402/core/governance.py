"""
Governance proposal evaluation.

State machine: Voting -> {Passed, Rejected, Cancelled}; Passed -> Executed
once `exec_after` has elapsed. Rejected, Executed and Cancelled are terminal.
Only evaluation lives here; transitions are driven by the program.
"""

from __future__ import annotations

from enum import IntEnum, unique
from typing import TYPE_CHECKING

from ..constants import FEE_DENOMINATOR, GOV_QUORUM_BPS, GOV_THRESHOLD_BPS

if TYPE_CHECKING:  # pragma: no cover
    from ..state.accounts import GovProposal


@unique
class ProposalStatus(IntEnum):
    VOTING = 0
    PASSED = 1
    REJECTED = 2
    EXECUTED = 3
    CANCELLED = 4


@unique
class ProposalType(IntEnum):
    FEE_CHANGE = 1
    AMP_CHANGE = 2
    ADMIN_FEE = 3
    PAUSE = 4
    AUTHORITY = 5


_TERMINAL = frozenset({ProposalStatus.REJECTED, ProposalStatus.EXECUTED, ProposalStatus.CANCELLED})


def is_terminal(status: ProposalStatus) -> bool:
    return status in _TERMINAL


def can_execute(proposal: "GovProposal", now_slot: int) -> bool:
    return proposal.status is ProposalStatus.PASSED and now_slot >= proposal.exec_after


def approval_rate(proposal: "GovProposal") -> float:
    total = proposal.votes_for + proposal.votes_against
    if total == 0:
        return 0.0
    return proposal.votes_for / total


def quorum_rate(proposal: "GovProposal") -> float:
    if proposal.lp_snapshot == 0:
        return 0.0
    return (proposal.votes_for + proposal.votes_against) / proposal.lp_snapshot


def has_quorum(proposal: "GovProposal", quorum_bps: int = GOV_QUORUM_BPS) -> bool:
    """Turnout >= quorum_bps of the LP snapshot, in exact integer arithmetic."""
    if proposal.lp_snapshot == 0:
        return False
    turnout = proposal.votes_for + proposal.votes_against
    return turnout * FEE_DENOMINATOR >= proposal.lp_snapshot * quorum_bps


def is_approved(proposal: "GovProposal", threshold_bps: int = GOV_THRESHOLD_BPS) -> bool:
    """votes_for strictly above threshold_bps of votes cast."""
    total = proposal.votes_for + proposal.votes_against
    if total == 0:
        return False
    return proposal.votes_for * FEE_DENOMINATOR > total * threshold_bps
