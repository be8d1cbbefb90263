# examples/drop_ring.py
from xpbd_tire.config import SolverConfig
from xpbd_tire.logging_config import setup_logging
from xpbd_tire.renderer import DebugRenderer
from xpbd_tire.scene import Scene

setup_logging()

scene = Scene(config=SolverConfig(dt=1/60, gravity=900.0, iterations=18, damping=0.985))
ring = scene.add_ring(400.0, 150.0, count=8)
renderer = DebugRenderer()

for i in range(240):
    scene.step()
    if i % 60 == 59:
        renderer.render_scene(scene)

print("t:", scene.world.time)
print("lowest y:", ring.lowest_y(), "limit:", scene.ground_limit)
print("area:", ring.pressure.area(), "rest:", ring.pressure.rest_area)
