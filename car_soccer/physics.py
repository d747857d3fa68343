"""
Ball and Car Integration
========================
Gravity, position integration, wall bounces, and bounded car motion.
"""

from __future__ import annotations
import jax.numpy as jnp

from .constants import DT, GRAVITY_Y, BALL_SHADOW_HEIGHT
from .sim_types import BallState, CarState
from .math_utils import get_car_forward_dir
from .collision import resolve_ball_wall_axis, is_outside_arena_xz


# =============================================================================
# BASIC PHYSICS INTEGRATION
# =============================================================================


def apply_gravity(vel: jnp.ndarray, dt: float = DT) -> jnp.ndarray:
    """
    Apply gravitational acceleration to velocity.

    Args:
        vel: Current velocity [..., 3]
        dt: Time step

    Returns:
        Updated velocity [..., 3]
    """
    gravity = jnp.array([0.0, GRAVITY_Y, 0.0])
    return vel + gravity * dt


def integrate_position(pos: jnp.ndarray, vel: jnp.ndarray, dt: float = DT) -> jnp.ndarray:
    """
    Explicit Euler position update.

    pos(t+dt) = pos(t) + vel(t) * dt
    """
    return pos + vel * dt


# =============================================================================
# BALL PHYSICS STEP
# =============================================================================


def step_ball(ball: BallState, dt: float = DT) -> BallState:
    """
    Advance ball physics by one timestep.

    The walls are checked x, then y, then z; each check can fire in the same
    step. Gravity only applies when neither the floor nor the ceiling was
    hit this step.

    Args:
        ball: Current ball state
        dt: Time step

    Returns:
        Updated ball state
    """
    displacement = ball.vel * dt
    pos = integrate_position(ball.pos, ball.vel, dt)
    vel = ball.vel

    pos, vel, _ = resolve_ball_wall_axis(pos, vel, displacement, axis=0)

    pos, vel, hit_y = resolve_ball_wall_axis(pos, vel, displacement, axis=1)
    vel = jnp.where(hit_y[:, None], vel, apply_gravity(vel, dt))

    pos, vel, _ = resolve_ball_wall_axis(pos, vel, displacement, axis=2)

    return ball.replace(pos=pos, vel=vel)


def ball_shadow_offset(ball: BallState) -> jnp.ndarray:
    """
    Shadow position relative to the ball: straight down, just above the floor.

    Args:
        ball: Ball state

    Returns:
        Offset [0, -y + BALL_SHADOW_HEIGHT, 0]. Shape: (N, 3)
    """
    y = ball.pos[:, 1]
    zeros = jnp.zeros_like(y)
    return jnp.stack([zeros, -y + BALL_SHADOW_HEIGHT, zeros], axis=-1)


# =============================================================================
# CAR PHYSICS STEP
# =============================================================================


def step_car(car: CarState, dt: float = DT) -> CarState:
    """
    Advance the car along its forward axis by one timestep.

    A move that would leave the arena footprint is dropped, so the car simply
    stops at the wall for that step.

    Args:
        car: Current car state
        dt: Time step

    Returns:
        Updated car state
    """
    forward_dir = get_car_forward_dir(car.yaw)
    moved = car.pos + forward_dir * (car.vel[:, 2] * dt)[:, None]

    out_of_bounds = is_outside_arena_xz(moved)
    pos = jnp.where(out_of_bounds[:, None], car.pos, moved)

    return car.replace(pos=pos)
