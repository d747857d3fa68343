"""
car_soccer - JAX Car Soccer Match Core
======================================

Physics, collision, and match logic for a one-car, one-ball soccer
mini-game in a walled arena with two goals.

Architecture:
- All state is immutable (Flax structs)
- All physics functions are pure (no side effects)
- Batch dimension (N_ENVS) is always axis 0
- Rendering and input devices live outside; MatchController bridges them

Quick Start:
    >>> import jax
    >>> from car_soccer import create_initial_state, create_zero_input, step_match
    >>>
    >>> key = jax.random.PRNGKey(0)
    >>> state = create_initial_state(n_envs=1, rng_key=key)
    >>> inputs = create_zero_input(n_envs=1)
    >>> new_state = step_match(state, inputs, key, 1.0 / 60.0)

Interactive use:
    >>> from car_soccer import MatchController
    >>>
    >>> match = MatchController()
    >>> match.on_key_down("w")
    >>> match.update(1.0 / 60.0)
"""

from __future__ import annotations

# Type definitions
from .sim_types import (
    BallState,
    CarState,
    MatchInput,
    MatchState,
)

# Constants (for advanced users)
from .constants import (
    DT,
    GRAVITY_Y,
    BALL_RADIUS,
    CAR_MAX_SPEED,
    CAR_ACCEL,
    CAR_ROTATION_RATE,
    ARENA_EXTENT_X,
    ARENA_EXTENT_Z,
    ARENA_FLOOR_Y,
    ARENA_CEILING_Y,
)

# Math utilities
from .math_utils import (
    dot,
    length,
    normalize,
    reflect_vector,
    quat_rotate_vector,
    quat_from_yaw,
    get_car_forward_dir,
)

# Main match functions
from .game import (
    # State initialization
    create_initial_state,
    create_initial_ball_state,
    create_initial_car_state,
    create_zero_input,
    # Main simulation
    step_match,
    simulate_n_steps,
    reset_match,
    reset_ball,
    reset_car,
    check_goal,
)

# Physics functions (for customization)
from .physics import (
    step_ball,
    step_car,
    apply_gravity,
    integrate_position,
    ball_shadow_offset,
)

# Mechanics (for customization)
from .mechanics import (
    apply_throttle,
    apply_coast_deceleration,
    apply_turn,
    apply_car_input,
)

# Collision (for customization)
from .collision import (
    resolve_ball_wall_axis,
    is_outside_arena_xz,
    resolve_car_ball_collision,
)

# Host integration
from .controller import MatchController
from .render_state import RenderSnapshot, EntityTransform, snapshot_from_state

__version__ = "0.1.0"
__all__ = [
    # Types
    "BallState",
    "CarState",
    "MatchInput",
    "MatchState",
    # Constants
    "DT",
    "GRAVITY_Y",
    "BALL_RADIUS",
    "CAR_MAX_SPEED",
    "CAR_ACCEL",
    "CAR_ROTATION_RATE",
    "ARENA_EXTENT_X",
    "ARENA_EXTENT_Z",
    "ARENA_FLOOR_Y",
    "ARENA_CEILING_Y",
    # Main API
    "create_initial_state",
    "create_initial_ball_state",
    "create_initial_car_state",
    "create_zero_input",
    "step_match",
    "simulate_n_steps",
    "reset_match",
    "reset_ball",
    "reset_car",
    "check_goal",
    # Math
    "dot",
    "length",
    "normalize",
    "reflect_vector",
    "quat_rotate_vector",
    "quat_from_yaw",
    "get_car_forward_dir",
    # Physics
    "step_ball",
    "step_car",
    "apply_gravity",
    "integrate_position",
    "ball_shadow_offset",
    # Mechanics
    "apply_throttle",
    "apply_coast_deceleration",
    "apply_turn",
    "apply_car_input",
    # Collision
    "resolve_ball_wall_axis",
    "is_outside_arena_xz",
    "resolve_car_ball_collision",
    # Host integration
    "MatchController",
    "RenderSnapshot",
    "EntityTransform",
    "snapshot_from_state",
]
