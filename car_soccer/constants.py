"""
Simulation Constants
====================
Arena geometry, goal apertures, and ball/car tuning for the car soccer match.
World space is Y-up; the two goals sit at the ends of the Z axis.
Units are meters and seconds.
"""

from __future__ import annotations
import jax.numpy as jnp


# =============================================================================
# Core Physics
# =============================================================================
GRAVITY_Y = -15.0                       # Gravity in m/s^2 (negative = down)
DT = 1.0 / 60.0                         # Default frame time: 60 Hz


# =============================================================================
# Arena Dimensions
# =============================================================================
# Limits are for the ball/car center, i.e. the walls already shrunk by the
# ball radius.
ARENA_EXTENT_X = 37.4                   # Side walls at x = ±37.4
ARENA_FLOOR_Y = 2.6                     # Lowest ball center height
ARENA_CEILING_Y = 32.4                  # Highest ball center height
ARENA_EXTENT_Z = 47.4                   # Back walls at z = ±47.4

ARENA_MIN = jnp.array([-ARENA_EXTENT_X, ARENA_FLOOR_Y, -ARENA_EXTENT_Z])
ARENA_MAX = jnp.array([ARENA_EXTENT_X, ARENA_CEILING_Y, ARENA_EXTENT_Z])


# =============================================================================
# Goals
# =============================================================================
GOAL_HALF_WIDTH = 12.6                  # Goal mouth spans x in (-12.6, 12.6)
GOAL_MIN_Y = 0.0                        # Goal mouth spans y in (0, 12.6)
GOAL_MAX_Y = 12.6
GOAL_LINE_Z = 46.5                      # Away goal: z < -46.5, home goal: z > 46.5


# =============================================================================
# Ball Constants
# =============================================================================
BALL_RADIUS = 2.6
BALL_SPAWN_POS = jnp.array([0.0, 2.6, 0.0])
BALL_WALL_RESTITUTION = 0.8             # Fraction of velocity kept after a wall bounce

# Kickoff launch: random horizontal heading, fixed speed, fixed lift
BALL_RESET_SPEED = 25.0                 # Horizontal speed in m/s
BALL_RESET_UP_SPEED = 15.0              # Vertical speed in m/s

BALL_SHADOW_HEIGHT = 0.01               # Shadow sits just above the floor


# =============================================================================
# Car Constants
# =============================================================================
CAR_SPAWN_POS = jnp.array([0.0, 1.0, 45.0])
CAR_SIZE = jnp.array([4.0, 4.0, 5.0])   # Box width, height, length
CAR_COLLISION_RADIUS = 4.0

CAR_MAX_SPEED = 40.0                    # m/s
CAR_ACCEL = 75.0                        # m/s^2, tuned by feel
CAR_ROTATION_RATE = 3.0 * jnp.pi / 2.0  # rad/s


# =============================================================================
# Car-Ball Hit Tuning
# =============================================================================
BALL_HIT_SPEED_RETAIN = 0.5             # Share of the ball's old speed kept on a hit
BALL_HIT_Y_CORRECTION = 0.5             # Subtracted from vel.y so hits don't pop up too high


# =============================================================================
# Unit Normals (inward-facing)
# =============================================================================
AXIS_NORMALS = jnp.eye(3)               # Row i is the +axis unit normal
