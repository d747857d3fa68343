"""
Arena Bounds and Collision Resolution
=====================================
Axis-aligned arena walls, ball wall bounces, car bound checks, and the
car-ball hit.
Uses branchless jnp.where() so every environment in the batch runs the
same program.
"""

from __future__ import annotations
import jax.numpy as jnp

from .constants import (
    ARENA_MIN, ARENA_MAX, ARENA_EXTENT_X, ARENA_EXTENT_Z,
    AXIS_NORMALS, BALL_WALL_RESTITUTION,
    BALL_HIT_SPEED_RETAIN, BALL_HIT_Y_CORRECTION,
)
from .math_utils import length, normalize, reflect_vector


# =============================================================================
# BALL vs ARENA
# =============================================================================


def resolve_ball_wall_axis(
    pos: jnp.ndarray,
    vel: jnp.ndarray,
    displacement: jnp.ndarray,
    axis: int,
    restitution: float = BALL_WALL_RESTITUTION,
) -> tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Bounce the ball off the pair of walls perpendicular to one axis.

    If the ball center is past either wall, this step's displacement along
    the axis is undone and the velocity is reflected about the wall's inward
    normal, then scaled by the restitution.

    Args:
        pos: Ball positions after integration. Shape: (N, 3)
        vel: Ball velocities. Shape: (N, 3)
        displacement: Displacement applied this step. Shape: (N, 3)
        axis: 0 = x walls, 1 = floor/ceiling, 2 = z walls
        restitution: Fraction of velocity kept

    Returns:
        Tuple of (new_pos, new_vel, hit_mask). hit_mask shape: (N,)
    """
    coord = pos[:, axis]
    below = coord < ARENA_MIN[axis]
    above = coord > ARENA_MAX[axis]
    hit = below | above

    # Low wall faces +axis, high wall faces -axis
    normal = jnp.where(below[:, None], AXIS_NORMALS[axis], -AXIS_NORMALS[axis])

    new_pos = pos.at[:, axis].add(jnp.where(hit, -displacement[:, axis], 0.0))

    reflected = reflect_vector(normal, vel) * restitution
    new_vel = jnp.where(hit[:, None], reflected, vel)

    return new_pos, new_vel, hit


def is_outside_arena_xz(pos: jnp.ndarray) -> jnp.ndarray:
    """
    Check whether positions left the arena footprint.

    Only the side walls and back walls apply; height is ignored.

    Args:
        pos: Positions. Shape: (N, 3)

    Returns:
        Boolean mask. Shape: (N,)
    """
    x = pos[:, 0]
    z = pos[:, 2]
    return (
        (x < -ARENA_EXTENT_X) | (x > ARENA_EXTENT_X) |
        (z < -ARENA_EXTENT_Z) | (z > ARENA_EXTENT_Z)
    )


# =============================================================================
# CAR vs BALL
# =============================================================================


def resolve_car_ball_collision(
    ball_pos: jnp.ndarray,
    ball_vel: jnp.ndarray,
    ball_radius: jnp.ndarray,
    car_pos: jnp.ndarray,
    car_vel: jnp.ndarray,
    car_collision_radius: jnp.ndarray,
) -> tuple[jnp.ndarray, jnp.ndarray]:
    """
    Resolve the car hitting the ball.

    The car is a sphere of car_collision_radius around its origin. While the
    two spheres overlap, the ball is relaunched every frame:

    1. Direction = normalized car -> ball vector (old direction discarded)
    2. Speed = car speed + BALL_HIT_SPEED_RETAIN * old ball speed
    3. vel.y -= BALL_HIT_Y_CORRECTION

    Args:
        ball_pos: Ball positions. Shape: (N, 3)
        ball_vel: Ball velocities. Shape: (N, 3)
        ball_radius: Ball radii. Shape: (N,)
        car_pos: Car positions. Shape: (N, 3)
        car_vel: Car local-frame velocities. Shape: (N, 3)
        car_collision_radius: Car proxy radii. Shape: (N,)

    Returns:
        Tuple of (new_ball_vel, hit_mask). hit_mask shape: (N,)
    """
    car_to_ball = ball_pos - car_pos
    is_colliding = length(car_to_ball) < car_collision_radius + ball_radius

    ball_speed = length(ball_vel)
    car_speed = length(car_vel)
    hit_speed = car_speed + BALL_HIT_SPEED_RETAIN * ball_speed

    hit_vel = normalize(car_to_ball) * hit_speed[:, None]
    hit_vel = hit_vel.at[:, 1].add(-BALL_HIT_Y_CORRECTION)

    new_ball_vel = jnp.where(is_colliding[:, None], hit_vel, ball_vel)
    return new_ball_vel, is_colliding
