"""
State Data Structures (PyTrees)
===============================
Flax struct dataclasses for match state.
State is represented as "Struct of Arrays" for vectorized computation.
Batch dimension (N_ENVS) is ALWAYS axis 0.
"""

from __future__ import annotations
import jax.numpy as jnp
import flax.struct as struct


@struct.dataclass
class BallState:
    """
    Ball state.

    All arrays have shape (N_ENVS, ...) where N_ENVS is the batch dimension.

    Attributes:
        pos: Ball center in world space. Shape: (N, 3)
        vel: Ball linear velocity in m/s. Shape: (N, 3)
        radius: Collision and render radius. Shape: (N,)
        initial_pos: Spawn position restored on reset. Shape: (N, 3)
    """
    pos: jnp.ndarray          # (N, 3) - Position [x, y, z]
    vel: jnp.ndarray          # (N, 3) - Linear velocity [vx, vy, vz]
    radius: jnp.ndarray       # (N,)   - Fixed after creation
    initial_pos: jnp.ndarray  # (N, 3) - Fixed after creation


@struct.dataclass
class CarState:
    """
    Car state.

    The car only ever moves along its own forward (local +Z) axis, so only
    the z component of `vel` is used for motion.

    Attributes:
        pos: Car origin in world space. Shape: (N, 3)
        vel: Velocity in the car's local frame. Shape: (N, 3)
        yaw: Rotation about world +Y in radians. Shape: (N,)
        size: Box dimensions [width, height, length]. Shape: (N, 3)
        collision_radius: Circular collision proxy radius. Shape: (N,)
        initial_pos: Spawn position restored on reset. Shape: (N, 3)
    """
    pos: jnp.ndarray               # (N, 3)
    vel: jnp.ndarray               # (N, 3) - local frame, only z drives motion
    yaw: jnp.ndarray               # (N,)
    size: jnp.ndarray              # (N, 3)
    collision_radius: jnp.ndarray  # (N,)
    initial_pos: jnp.ndarray       # (N, 3)


@struct.dataclass
class MatchInput:
    """
    Two-axis driver input.

    Attributes:
        turn: Turn axis in {-1, 0, 1} (x of the input vector). Shape: (N,)
        throttle: Throttle axis in {-1, 0, 1} (y of the input vector). Shape: (N,)
    """
    turn: jnp.ndarray      # (N,) - -1 left, 1 right
    throttle: jnp.ndarray  # (N,) - 1 forward, -1 reverse


@struct.dataclass
class MatchState:
    """
    Complete match state for all environments.

    Attributes:
        ball: Ball state for all environments.
        car: Car state for all environments.
        ball_shadow: Shadow offset relative to the ball. Shape: (N, 3)
        tick_count: Number of steps taken. Shape: (N,)
        away_goal: Ball entered the away goal (z < 0) this tick. Shape: (N,)
        home_goal: Ball entered the home goal (z > 0) this tick. Shape: (N,)
    """
    ball: BallState
    car: CarState
    ball_shadow: jnp.ndarray  # (N, 3)
    tick_count: jnp.ndarray   # (N,) - Step counter
    away_goal: jnp.ndarray    # (N,) - bool, per-tick only
    home_goal: jnp.ndarray    # (N,) - bool, per-tick only
