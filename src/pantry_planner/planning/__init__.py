"""
Weekly plan generation: proposal, repair and orchestration.
"""

from pantry_planner.planning.errors import PlanningError, MalformedProposal, InsufficientPool
from pantry_planner.planning.assembler import assemble, check_pool
from pantry_planner.planning.proposer import (
    PlanProposer,
    DraftDayEntry,
    parse_proposal,
    build_draft,
)
from pantry_planner.planning.auto_plan import auto_plan

__all__ = [
    "PlanningError",
    "MalformedProposal",
    "InsufficientPool",
    "assemble",
    "check_pool",
    "PlanProposer",
    "DraftDayEntry",
    "parse_proposal",
    "build_draft",
    "auto_plan",
]
