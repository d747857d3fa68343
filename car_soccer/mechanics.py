"""
Driving Mechanics
=================
Maps the two-axis driver input onto the car: throttle with a soft speed cap,
coasting deceleration, and throttle-gated turning.
"""

from __future__ import annotations
import jax.numpy as jnp

from .constants import DT, CAR_MAX_SPEED, CAR_ACCEL, CAR_ROTATION_RATE
from .sim_types import CarState, MatchInput
from .math_utils import length


def apply_throttle(
    vel: jnp.ndarray,
    throttle: jnp.ndarray,
    dt: float = DT,
    accel: float = CAR_ACCEL,
    max_speed: float = CAR_MAX_SPEED,
) -> jnp.ndarray:
    """
    Accelerate along local z, reverting the increment if it breaks the cap.

    Positive throttle drives toward local -Z (the car's nose). The cap is
    soft: the whole increment is dropped rather than clamped to max_speed.

    Args:
        vel: Car local-frame velocities. Shape: (N, 3)
        throttle: Throttle axis. Shape: (N,)
        dt: Time step

    Returns:
        New velocities. Shape: (N, 3)
    """
    accelerated = vel.at[:, 2].add(-throttle * accel * dt)
    too_fast = length(accelerated) > max_speed
    return jnp.where(too_fast[:, None], vel, accelerated)


def apply_coast_deceleration(
    vel: jnp.ndarray,
    throttle: jnp.ndarray,
    dt: float = DT,
    accel: float = CAR_ACCEL,
) -> jnp.ndarray:
    """
    Slow a car with no throttle toward rest, stopping exactly at zero.

    Args:
        vel: Car local-frame velocities. Shape: (N, 3)
        throttle: Throttle axis. Shape: (N,)
        dt: Time step

    Returns:
        New velocities. Shape: (N, 3)
    """
    vz = vel[:, 2]
    slowed = jnp.sign(vz) * jnp.maximum(jnp.abs(vz) - accel * dt, 0.0)
    coasting = throttle == 0
    return vel.at[:, 2].set(jnp.where(coasting, slowed, vz))


def apply_turn(
    yaw: jnp.ndarray,
    turn: jnp.ndarray,
    throttle: jnp.ndarray,
    dt: float = DT,
    rotation_rate: float = CAR_ROTATION_RATE,
) -> jnp.ndarray:
    """
    Rotate the car about +Y.

    Turning is scaled by the throttle, so a car only turns while driving and
    steers the other way in reverse.
    """
    return yaw + throttle * -turn * rotation_rate * dt


def apply_car_input(car: CarState, inputs: MatchInput, dt: float = DT) -> CarState:
    """
    Apply one frame of driver input: throttle, then coasting, then turning.

    Args:
        car: Current car state
        inputs: Driver input
        dt: Time step

    Returns:
        Car state with updated velocity and yaw (position unchanged)
    """
    throttle = inputs.throttle.astype(car.vel.dtype)
    turn = inputs.turn.astype(car.vel.dtype)

    vel = apply_throttle(car.vel, throttle, dt)
    vel = apply_coast_deceleration(vel, throttle, dt)
    yaw = apply_turn(car.yaw, turn, throttle, dt)

    return car.replace(vel=vel, yaw=yaw)
