"""
Vector and Rotation Helpers
===========================
Vectorized vector math for the simulation.
Vectors are the trailing axis of an array, i.e. shape [..., 3].
Quaternions are stored as [w, x, y, z] (scalar-first convention).
"""

from __future__ import annotations
import jax.numpy as jnp


def dot(a: jnp.ndarray, b: jnp.ndarray) -> jnp.ndarray:
    """Dot product over the last axis. Shape: [...]"""
    return jnp.sum(a * b, axis=-1)


def length(v: jnp.ndarray) -> jnp.ndarray:
    """Euclidean length over the last axis. Shape: [...]"""
    return jnp.linalg.norm(v, axis=-1)


def normalize(v: jnp.ndarray) -> jnp.ndarray:
    """
    Scale vectors to unit length.

    Zero-length vectors come back as zero vectors instead of NaN.

    Args:
        v: Vectors [..., 3]

    Returns:
        Unit vectors [..., 3]
    """
    norm = jnp.linalg.norm(v, axis=-1, keepdims=True)
    safe_norm = jnp.where(norm > 0.0, norm, 1.0)
    return v / safe_norm


def reflect_vector(n: jnp.ndarray, v: jnp.ndarray) -> jnp.ndarray:
    """
    Reflect a vector off a surface with unit normal n.

    v' = v - 2(v.n)n

    Args:
        n: Unit surface normal [..., 3]. Not modified.
        v: Incoming vector [..., 3]

    Returns:
        Reflected vector [..., 3]
    """
    v_dot_n = jnp.sum(v * n, axis=-1, keepdims=True)
    return v - 2.0 * v_dot_n * n


def quat_rotate_vector(q: jnp.ndarray, v: jnp.ndarray) -> jnp.ndarray:
    """
    Rotate a vector by a quaternion.

    Uses the formula: v' = q * v * q^(-1)
    Optimized to avoid full quaternion multiplications.

    Args:
        q: Rotation quaternion [..., 4] in [w, x, y, z] order
        v: Vector to rotate [..., 3]

    Returns:
        Rotated vector [..., 3]
    """
    qw = q[..., 0:1]
    qv = q[..., 1:4]

    uv = jnp.cross(qv, v)
    uuv = jnp.cross(qv, uv)

    # v' = v + 2 * (qw * (qv × v) + qv × (qv × v))
    return v + 2.0 * (qw * uv + uuv)


def quat_from_yaw(yaw: jnp.ndarray) -> jnp.ndarray:
    """
    Create quaternion from yaw angle (rotation around the world Y axis).

    Args:
        yaw: Yaw angle(s) in radians. Shape: (...,)

    Returns:
        Quaternion(s) [w, x, y, z]. Shape: (..., 4)
    """
    half_yaw = yaw / 2.0
    cos_half = jnp.cos(half_yaw)
    sin_half = jnp.sin(half_yaw)

    # Rotation around Y: [cos(θ/2), 0, sin(θ/2), 0]
    zeros = jnp.zeros_like(yaw)
    return jnp.stack([cos_half, zeros, sin_half, zeros], axis=-1)


def get_car_forward_dir(yaw: jnp.ndarray) -> jnp.ndarray:
    """
    Get the car's local +Z axis in world space.

    For a pure yaw this is (sin(yaw), 0, cos(yaw)).

    Args:
        yaw: Yaw angle(s) in radians. Shape: (...,)

    Returns:
        Forward direction in world space. Shape: (..., 3)
    """
    local_forward = jnp.array([0.0, 0.0, 1.0])
    return quat_rotate_vector(quat_from_yaw(yaw), local_forward)
