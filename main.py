# main.py
"""
Main entry point for the accretion galaxy simulation.

This script runs the engine headless:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Seeds the particle disk.
4. Runs the fixed-step simulation loop, optionally paced to wall time.
5. Logs a performance profile and shuts down.
"""
import logging
import sys
import time
import cProfile
import pstats
import io

from constants import DEFAULT_PARTICLE_COUNT
from params import ConfigurationError
from sampler import RandomSampler
from simulation import Simulation, FixedStepAccumulator
from utils import setup_logging, load_config, parse_config


def main(config_path: str = 'config.json') -> None:
    """
    The main function to run the simulation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Accretion Galaxy Simulation Starting ---")

    try:
        params, run_params = parse_config(config)
    except ConfigurationError:
        logging.info("--- Accretion Galaxy Simulation Aborted ---")
        return

    particle_count = run_params.get('particle_count', DEFAULT_PARTICLE_COUNT)
    log_throttle = run_params.get('log_throttle_steps', 100)
    if log_throttle <= 0:
        logging.info("Throttled progress logging disabled (log_throttle_steps <= 0).")
    max_steps = run_params.get('max_steps', 5000)
    reseed_every = run_params.get('reseed_every', 0)
    realtime = run_params.get('realtime', False)

    rng = RandomSampler(run_params.get('seed'))
    sim = Simulation(params, rng)
    sim.init(particle_count)

    accumulator = None
    frame_time = 0.0
    if realtime:
        accumulator = FixedStepAccumulator(params.time_step, run_params.get('max_steps_per_frame', 8))
        frame_time = 1.0 / run_params.get('target_fps', 60)
        logging.info(f"Real-time pacing enabled at {1.0 / frame_time:.0f} frames per second.")

    profiler = cProfile.Profile()

    step_num = 0
    last_tick = time.perf_counter()

    profiler.enable()
    while step_num < max_steps:
        if accumulator is not None:
            time.sleep(frame_time)
            now = time.perf_counter()
            steps = accumulator.advance(now - last_tick)
            last_tick = now
        else:
            steps = 1

        for _ in range(min(steps, max_steps - step_num)):
            sim.step()
            step_num += 1

            # Stands in for the interactive reset key
            if reseed_every and step_num % reseed_every == 0:
                logging.info(f"Reseeding ensemble at step {step_num}.")
                sim.init(particle_count)

            if log_throttle > 0 and step_num % log_throttle == 0:
                logging.info(f"Simulation step {step_num}/{max_steps}")
                stats = sim.diagnostics()
                logging.debug(
                    f"Step {step_num} | Mean speed: {stats['mean_speed']:.4f} | "
                    f"Mean brightness: {stats['mean_brightness']:.4f} | "
                    f"Mean radius: {stats['mean_radius']:.4f} | "
                    f"Recycled total: {stats['recycled_total']}"
                )
    profiler.disable()

    logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Accretion Galaxy Simulation Shutting Down ---")


if __name__ == "__main__":
    main(*sys.argv[1:2])
