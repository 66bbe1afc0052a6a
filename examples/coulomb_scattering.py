import numpy as np

from physicsim.simulations import ScatteringSimulation, ScatteringConfig

sim = ScatteringSimulation(ScatteringConfig(proton_number=79, count=2))

for _ in range(900):
    sim.step(1/60)

state = sim.current_state()
for pos, theta in zip(state.alpha_positions, state.deflections):
    print(f"start y,z=({pos[1]:8.1f}, {pos[2]:8.1f}) fm  deflection={np.degrees(theta):7.2f} deg")
