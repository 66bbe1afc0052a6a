"""
Microbenchmark: time per step for each simulation.
Run:
  python benchmarks/bench_steps.py
"""
import time

from physicsim.simulations import create_simulation, list_simulations, ScatteringConfig


def run(name: str, steps: int = 300, config=None):
    sim = create_simulation(name, config)

    # warmup
    for _ in range(30):
        sim.step(1/60)
    sim.toggle_pause(False)

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step(1/60)
    t1 = time.perf_counter()

    return (t1 - t0) / steps


if __name__ == "__main__":
    for name in list_simulations():
        per_step = run(name)
        print(f"{name:16s}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:10.1f}")
    print()
    # scattering cost grows with the alpha grid
    for count in range(0, 7, 2):
        per_step = run("scattering", config=ScatteringConfig(count=count))
        print(f"scattering count={count}  alphas={(count+1)**2:3d}  step={1e3*per_step:8.3f} ms")
