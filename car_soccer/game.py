"""
Match Logic and State Management
================================
State initialization, entity resets, goal detection, and the main
per-frame match step.
"""

from __future__ import annotations
import jax
import jax.numpy as jnp

from .constants import (
    DT, BALL_RADIUS, BALL_SPAWN_POS, BALL_RESET_SPEED, BALL_RESET_UP_SPEED,
    CAR_SPAWN_POS, CAR_SIZE, CAR_COLLISION_RADIUS,
    GOAL_HALF_WIDTH, GOAL_MIN_Y, GOAL_MAX_Y, GOAL_LINE_Z,
)
from .sim_types import BallState, CarState, MatchInput, MatchState
from .collision import resolve_car_ball_collision
from .physics import step_ball, step_car, ball_shadow_offset
from .mechanics import apply_car_input


def _select(mask: jnp.ndarray, on_true, on_false):
    """Pick per-environment leaves from two PyTrees of the same structure."""
    def select_leaf(a, b):
        expanded = mask.reshape(mask.shape + (1,) * (a.ndim - 1))
        return jnp.where(expanded, a, b)

    return jax.tree_util.tree_map(select_leaf, on_true, on_false)


def sanitize_dt(dt) -> jnp.ndarray:
    """Clamp negative or non-finite frame times to zero."""
    dt = jnp.asarray(dt, dtype=jnp.float32)
    return jnp.where(jnp.isfinite(dt) & (dt > 0.0), dt, 0.0)


# =============================================================================
# ENTITY RESETS
# =============================================================================


def reset_ball(
    ball: BallState,
    rng_key: jax.random.PRNGKey,
    mask: jnp.ndarray | None = None,
) -> BallState:
    """
    Put the ball back on its spawn point and launch it in a random direction.

    The launch velocity is (25 cos θ, 15, 25 sin θ) with θ uniform in
    [0, 2π), drawn independently per environment.

    Args:
        ball: Current ball state
        rng_key: JAX random key for the launch heading
        mask: Optional (N,) bool; only these environments are reset

    Returns:
        Reset ball state
    """
    n_envs = ball.pos.shape[0]
    theta = jax.random.uniform(rng_key, (n_envs,), minval=0.0, maxval=2.0 * jnp.pi)

    vel = jnp.stack([
        BALL_RESET_SPEED * jnp.cos(theta),
        jnp.full((n_envs,), BALL_RESET_UP_SPEED),
        BALL_RESET_SPEED * jnp.sin(theta),
    ], axis=-1)

    reset = ball.replace(pos=ball.initial_pos, vel=vel)
    if mask is None:
        return reset
    return _select(mask, reset, ball)


def reset_car(car: CarState, mask: jnp.ndarray | None = None) -> CarState:
    """Put the car back on its spawn point, facing forward, at rest."""
    reset = car.replace(
        pos=car.initial_pos,
        vel=jnp.zeros_like(car.vel),
        yaw=jnp.zeros_like(car.yaw),
    )
    if mask is None:
        return reset
    return _select(mask, reset, car)


@jax.jit
def reset_match(
    state: MatchState,
    rng_key: jax.random.PRNGKey,
    mask: jnp.ndarray | None = None,
) -> MatchState:
    """
    Manual reset of both entities, bypassing goal logic.

    Args:
        state: Current match state
        rng_key: JAX random key for the ball launch
        mask: Optional (N,) bool; only these environments are reset

    Returns:
        State with ball and car back at their spawns
    """
    return state.replace(
        ball=reset_ball(state.ball, rng_key, mask),
        car=reset_car(state.car, mask),
    )


# =============================================================================
# GOAL DETECTION
# =============================================================================


def check_goal(ball_pos: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """
    Check if the ball is inside either goal mouth.

    Args:
        ball_pos: Ball positions. Shape: (N, 3)

    Returns:
        Tuple of (away_goal, home_goal) boolean arrays. Shape: (N,)
    """
    x, y, z = ball_pos[:, 0], ball_pos[:, 1], ball_pos[:, 2]

    in_mouth = (
        (x > -GOAL_HALF_WIDTH) & (x < GOAL_HALF_WIDTH) &
        (y > GOAL_MIN_Y) & (y < GOAL_MAX_Y)
    )
    away_goal = in_mouth & (z < -GOAL_LINE_Z)
    home_goal = in_mouth & (z > GOAL_LINE_Z)

    return away_goal, home_goal


# =============================================================================
# MAIN MATCH STEP
# =============================================================================


@jax.jit
def step_match(
    state: MatchState,
    inputs: MatchInput,
    rng_key: jax.random.PRNGKey,
    dt: float = DT,
) -> MatchState:
    """
    Main match step function.

    PURE FUNCTION: No side effects, no mutations.

    Order: driver input -> car/ball hit -> car move -> ball move -> shadow
    -> goal check (and reset where a goal went in).

    Args:
        state: Current match state
        inputs: Driver input for this frame
        rng_key: JAX random key, only used if a goal triggers a reset
        dt: Frame time in seconds; negative or non-finite values act as 0

    Returns:
        New match state after one frame
    """
    dt = sanitize_dt(dt)

    car = apply_car_input(state.car, inputs, dt)

    ball_vel, _ = resolve_car_ball_collision(
        state.ball.pos,
        state.ball.vel,
        state.ball.radius,
        car.pos,
        car.vel,
        car.collision_radius,
    )
    ball = state.ball.replace(vel=ball_vel)

    car = step_car(car, dt)
    ball = step_ball(ball, dt)
    ball_shadow = ball_shadow_offset(ball)

    away_goal, home_goal = check_goal(ball.pos)
    scored = away_goal | home_goal

    ball = reset_ball(ball, rng_key, scored)
    car = reset_car(car, scored)

    return state.replace(
        ball=ball,
        car=car,
        ball_shadow=ball_shadow,
        tick_count=state.tick_count + 1,
        away_goal=away_goal,
        home_goal=home_goal,
    )


def simulate_n_steps(
    state: MatchState,
    inputs: MatchInput,
    rng_key: jax.random.PRNGKey,
    n_steps: int,
    dt: float = DT,
) -> MatchState:
    """Run n_steps frames with fixed input using XLA fusion."""
    keys = jax.random.split(rng_key, n_steps)

    def body_fn(carry, key):
        return step_match(carry, inputs, key, dt), None

    final_state, _ = jax.lax.scan(body_fn, state, keys)
    return final_state


# =============================================================================
# STATE INITIALIZATION
# =============================================================================


def _tile(vec, n_envs: int) -> jnp.ndarray:
    return jnp.tile(jnp.asarray(vec, dtype=jnp.float32)[None, :], (n_envs, 1))


def _check_n_envs(n_envs: int) -> None:
    if n_envs < 1:
        raise ValueError(f"n_envs must be at least 1, got {n_envs}")


def create_initial_ball_state(
    n_envs: int,
    rng_key: jax.random.PRNGKey,
    spawn_pos=BALL_SPAWN_POS,
    radius: float = BALL_RADIUS,
) -> BallState:
    """Create a launched ball for n_envs parallel environments."""
    _check_n_envs(n_envs)
    if not radius > 0:
        raise ValueError(f"ball radius must be positive, got {radius}")

    initial_pos = _tile(spawn_pos, n_envs)
    ball = BallState(
        pos=initial_pos,
        vel=jnp.zeros((n_envs, 3)),
        radius=jnp.full((n_envs,), radius, dtype=jnp.float32),
        initial_pos=initial_pos,
    )
    return reset_ball(ball, rng_key)


def create_initial_car_state(
    n_envs: int,
    spawn_pos=CAR_SPAWN_POS,
    size=CAR_SIZE,
    collision_radius: float = CAR_COLLISION_RADIUS,
) -> CarState:
    """Create a car at rest on its spawn point for n_envs environments."""
    _check_n_envs(n_envs)
    if not collision_radius > 0:
        raise ValueError(f"car collision radius must be positive, got {collision_radius}")

    initial_pos = _tile(spawn_pos, n_envs)
    return CarState(
        pos=initial_pos,
        vel=jnp.zeros((n_envs, 3)),
        yaw=jnp.zeros((n_envs,)),
        size=_tile(size, n_envs),
        collision_radius=jnp.full((n_envs,), collision_radius, dtype=jnp.float32),
        initial_pos=initial_pos,
    )


def create_zero_input(n_envs: int) -> MatchInput:
    """Create zero-initialized driver input."""
    return MatchInput(
        turn=jnp.zeros((n_envs,)),
        throttle=jnp.zeros((n_envs,)),
    )


def create_initial_state(
    n_envs: int,
    rng_key: jax.random.PRNGKey,
    ball: BallState | None = None,
    car: CarState | None = None,
) -> MatchState:
    """
    Create complete initial match state.

    Args:
        n_envs: Number of parallel matches
        rng_key: JAX random key for the opening ball launch
        ball: Optional prebuilt ball (e.g. custom spawn or radius)
        car: Optional prebuilt car

    Returns:
        Initial match state
    """
    if ball is None:
        ball = create_initial_ball_state(n_envs, rng_key)
    if car is None:
        car = create_initial_car_state(n_envs)

    return MatchState(
        ball=ball,
        car=car,
        ball_shadow=ball_shadow_offset(ball),
        tick_count=jnp.zeros(n_envs, dtype=jnp.int32),
        away_goal=jnp.zeros(n_envs, dtype=jnp.bool_),
        home_goal=jnp.zeros(n_envs, dtype=jnp.bool_),
    )
