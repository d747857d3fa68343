"""
Render Hand-off
===============
Converts one environment of the JAX match state into plain transforms for
an external renderer. Nothing here feeds back into the simulation.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
from pyrr import Quaternion, Vector3

from .math_utils import get_car_forward_dir, quat_from_yaw
from .sim_types import MatchState


@dataclass
class EntityTransform:
    position: Vector3
    rotation: Quaternion


@dataclass
class RenderSnapshot:
    """
    Everything the renderer needs for one frame.

    Attributes:
        ball: Ball transform (rotation is always identity)
        ball_radius: Ball radius for the sphere mesh
        ball_shadow: Shadow offset relative to the ball
        car: Car transform
        car_forward: Car's local +Z in world space
        car_size: Car box dimensions [width, height, length]
    """
    ball: EntityTransform
    ball_radius: float
    ball_shadow: Vector3
    car: EntityTransform
    car_forward: Vector3
    car_size: Vector3


def _to_pyrr_quat(quat_wxyz: np.ndarray) -> Quaternion:
    # JAX quat is [w, x, y, z]
    # pyrr Quaternion is [x, y, z, w]
    return Quaternion([quat_wxyz[1], quat_wxyz[2], quat_wxyz[3], quat_wxyz[0]])


def snapshot_from_state(state: MatchState, env_idx: int = 0) -> RenderSnapshot:
    """Slice env_idx out of the batch and convert it to pyrr types."""
    ball = state.ball
    car = state.car

    car_yaw = car.yaw[env_idx]
    car_quat = np.array(quat_from_yaw(car_yaw))

    return RenderSnapshot(
        ball=EntityTransform(
            position=Vector3(np.array(ball.pos[env_idx])),
            rotation=Quaternion(),
        ),
        ball_radius=float(ball.radius[env_idx]),
        ball_shadow=Vector3(np.array(state.ball_shadow[env_idx])),
        car=EntityTransform(
            position=Vector3(np.array(car.pos[env_idx])),
            rotation=_to_pyrr_quat(car_quat),
        ),
        car_forward=Vector3(np.array(get_car_forward_dir(car_yaw))),
        car_size=Vector3(np.array(car.size[env_idx])),
    )
