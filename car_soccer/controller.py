"""
Interactive Match Controller
============================
Stateful wrapper around the pure match step for a frame-driven host.
Owns the match state, the PRNG key, and the two-axis input vector that
keyboard events write to.
"""

from __future__ import annotations
import logging
import math

import jax
import jax.numpy as jnp
import numpy as np

from .constants import DT
from .game import create_initial_state, reset_match, step_match
from .render_state import RenderSnapshot, snapshot_from_state
from .sim_types import MatchInput

logger = logging.getLogger(__name__)


# Key names follow KeyboardEvent.key
THROTTLE_KEYS = {"w": 1, "ArrowUp": 1, "s": -1, "ArrowDown": -1}
TURN_KEYS = {"a": -1, "ArrowLeft": -1, "d": 1, "ArrowRight": 1}
RESET_KEY = " "


class MatchController:
    """
    Drives one batch of matches from key events and per-frame updates.

    Every environment in the batch receives the same input. Accessors report
    environment `env_idx`.
    """

    def __init__(self, n_envs: int = 1, seed: int = 0, env_idx: int = 0):
        self.n_envs = n_envs
        self.env_idx = env_idx

        # x = turn axis, y = throttle axis
        self.turn = 0
        self.throttle = 0

        logger.info("Initializing JAX match with %d envs...", n_envs)
        self.rng_key, init_key = jax.random.split(jax.random.PRNGKey(seed))
        self.state = create_initial_state(n_envs, init_key)

        # Trigger compilation so the first real frame doesn't stall
        logger.info("JIT compiling step function...")
        jax.block_until_ready(step_match(self.state, self.current_input(), init_key, 0.0))
        logger.info("JIT compilation complete.")

    def _next_key(self) -> jax.random.PRNGKey:
        self.rng_key, subkey = jax.random.split(self.rng_key)
        return subkey

    def current_input(self) -> MatchInput:
        """Snapshot the input vector for all environments."""
        return MatchInput(
            turn=jnp.full((self.n_envs,), self.turn, dtype=jnp.float32),
            throttle=jnp.full((self.n_envs,), self.throttle, dtype=jnp.float32),
        )

    # -------------------------------------------------------------------------
    # Input events
    # -------------------------------------------------------------------------

    def on_key_down(self, key: str) -> None:
        if key in THROTTLE_KEYS:
            self.throttle = THROTTLE_KEYS[key]
        elif key in TURN_KEYS:
            self.turn = TURN_KEYS[key]
        elif key == RESET_KEY:
            self.reset()

    def on_key_up(self, key: str) -> None:
        """Release an axis, unless a newer press on the opposite key owns it."""
        if key in THROTTLE_KEYS and self.throttle == THROTTLE_KEYS[key]:
            self.throttle = 0
        elif key in TURN_KEYS and self.turn == TURN_KEYS[key]:
            self.turn = 0

    # -------------------------------------------------------------------------
    # Frame driving
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Put ball and car back on their spawns in every environment."""
        logger.debug("Manual reset")
        self.state = reset_match(self.state, self._next_key())

    def update(self, dt: float = DT) -> None:
        """Advance all matches by one frame of dt seconds."""
        if not math.isfinite(dt) or dt < 0.0:
            logger.warning("Rejected frame time %r; stepping with dt=0", dt)
            dt = 0.0

        self.state = step_match(self.state, self.current_input(), self._next_key(), dt)

        if logger.isEnabledFor(logging.DEBUG):
            scored = np.asarray(self.state.away_goal | self.state.home_goal)
            if scored.any():
                logger.debug("Goal in envs %s; entities reset", np.flatnonzero(scored).tolist())

    # -------------------------------------------------------------------------
    # Read-only views for the renderer
    # -------------------------------------------------------------------------

    @property
    def ball_position(self) -> np.ndarray:
        return np.array(self.state.ball.pos[self.env_idx])

    @property
    def ball_shadow(self) -> np.ndarray:
        return np.array(self.state.ball_shadow[self.env_idx])

    @property
    def car_position(self) -> np.ndarray:
        return np.array(self.state.car.pos[self.env_idx])

    @property
    def car_yaw(self) -> float:
        return float(self.state.car.yaw[self.env_idx])

    def snapshot(self) -> RenderSnapshot:
        return snapshot_from_state(self.state, self.env_idx)
