"""Domain layer: states, actions, generative models and state enumeration."""

from gridlife.domain.actions import (
    Action,
    Eat,
    Look,
    Move,
    Reproduce,
    action_label,
    build_action_space,
)
from gridlife.domain.dynamics import apply_action, regrow, regrowth_outcomes
from gridlife.domain.mdp import FullyObservableModel
from gridlife.domain.pomdp import PartiallyObservableModel, Transition
from gridlife.domain.state import (
    CORNERS,
    Corner,
    LifeState,
    LookResult,
    Observation,
    TerminationReason,
    corner_at,
    initial_state,
    is_terminal,
    termination_reason,
)
from gridlife.domain.state_space import enumerate_states, state_space_size

__all__ = [
    "Action",
    "CORNERS",
    "Corner",
    "Eat",
    "FullyObservableModel",
    "LifeState",
    "Look",
    "LookResult",
    "Move",
    "Observation",
    "PartiallyObservableModel",
    "Reproduce",
    "TerminationReason",
    "Transition",
    "action_label",
    "apply_action",
    "build_action_space",
    "corner_at",
    "enumerate_states",
    "initial_state",
    "is_terminal",
    "regrow",
    "regrowth_outcomes",
    "state_space_size",
    "termination_reason",
]
