"""
Microbenchmark: time per step vs number of rings.
Run:
  python benchmarks/bench_steps.py
"""
import time
from xpbd_tire.scene import Scene
from xpbd_tire.profiler import Profiler

def run(n: int, steps: int = 300):
    prof = Profiler()
    scene = Scene(profiler=prof)

    # a row of touching tires resting on the ground
    for i in range(n):
        scene.add_ring(60.0 + 98.0 * i, 300.0)

    # warmup
    for _ in range(30):
        scene.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        scene.step(steer=40.0)
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [1, 2, 4, 8]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["predict", "contacts", "relax", "reconcile"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
