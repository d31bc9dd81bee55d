"""Online planning for the partially observable variant."""

from gridlife.planning.belief import ParticleBelief, ParticleFilter
from gridlife.planning.pomcp import PlanResult, POMCPPlanner
from gridlife.planning.tree import ROOT, SearchTree, TreeNode

__all__ = [
    "POMCPPlanner",
    "ParticleBelief",
    "ParticleFilter",
    "PlanResult",
    "ROOT",
    "SearchTree",
    "TreeNode",
]
