# examples/steer_ring.py
from xpbd_tire.config import RingTuning
from xpbd_tire.scene import Scene
from xpbd_tire.types import Rect

scene = Scene(box=Rect(520.0, 316.0, 64.0, 64.0))
player = scene.add_ring(300.0, 250.0)
scene.add_ring(700.0, 250.0)

# Let both tires settle
for _ in range(120):
    scene.step()

# Softer tread, heavier tire
scene.request_tuning(RingTuning(tire=0.12, mass_scale=1.5))

for i in range(300):
    scene.step(steer=40.0, jump=(i % 90 == 0))

print("player hub:", player.hub.position, "v:", player.hub.velocity)
print("grounded:", scene.is_grounded(player))
