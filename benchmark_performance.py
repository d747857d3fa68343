import time
import jax
import jax.numpy as jnp
import car_soccer

# Configuration
N_ENVS = 4096
N_STEPS_LATENCY = 1000
N_STEPS_THROUGHPUT = 10000

def run_benchmark():
    print(f"JAX Backend: {jax.devices()[0].platform}")
    print(f"Devices: {jax.devices()}")

    # Initialize state
    print("Initializing state...")
    key = jax.random.PRNGKey(0)
    key, init_key = jax.random.split(key)
    state = car_soccer.create_initial_state(N_ENVS, init_key)

    # Full throttle, turning left: keeps the car busy and the ball getting hit
    inputs = car_soccer.MatchInput(
        turn=jnp.full((N_ENVS,), -1.0),
        throttle=jnp.ones((N_ENVS,)),
    )

    # Warmup (step_match is already jitted)
    print("Compiling step_match...")
    _ = car_soccer.step_match(state, inputs, key)

    # --- TEST A: LATENCY (Python Loop) ---
    print(f"\n--- TEST A: LATENCY (Python Loop, {N_STEPS_LATENCY} steps) ---")
    keys = jax.random.split(key, N_STEPS_LATENCY)
    start_time = time.time()
    current_state = state
    for i in range(N_STEPS_LATENCY):
        current_state = car_soccer.step_match(current_state, inputs, keys[i])
    # Block on a leaf node to ensure computation is done
    jax.block_until_ready(current_state.ball.pos)
    end_time = time.time()

    total_time_a = end_time - start_time
    sps_a = (N_ENVS * N_STEPS_LATENCY) / total_time_a
    print(f"Total Time: {total_time_a:.4f} s")
    print(f"Steps Per Second (SPS): {sps_a:,.0f}")
    print(f"Latency per step: {(total_time_a / N_STEPS_LATENCY) * 1000:.4f} ms")

    # --- TEST B: THROUGHPUT (XLA Fusion) ---
    print(f"\n--- TEST B: THROUGHPUT (XLA Fusion, {N_STEPS_THROUGHPUT} steps) ---")

    @jax.jit
    def run_rollout(state, inputs, rng_key):
        return car_soccer.simulate_n_steps(state, inputs, rng_key, N_STEPS_THROUGHPUT)

    print("Compiling rollout_scan...")
    _ = run_rollout(state, inputs, key)

    print("Running benchmark...")
    start_time = time.time()
    final_state = run_rollout(state, inputs, key)
    jax.block_until_ready(final_state.ball.pos)
    end_time = time.time()

    total_time_b = end_time - start_time
    sps_b = (N_ENVS * N_STEPS_THROUGHPUT) / total_time_b
    print(f"Total Time: {total_time_b:.4f} s")
    print(f"Steps Per Second (SPS): {sps_b:,.0f}")

    ticks = int(jnp.sum(final_state.tick_count))
    print(f"Ticks simulated: {ticks:,}")

if __name__ == "__main__":
    run_benchmark()
