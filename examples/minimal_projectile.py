from physicsim.simulations import ProjectileSimulation, ProjectileConfig

sim = ProjectileSimulation(ProjectileConfig(position=(0.0, 20.0, 0.0), velocity=(2.0, 0.0, 0.0),
                                            restitution=0.8))
dt = 1/60
for i in range(600):
    sim.step(dt)
    if i % 60 == 0:
        s = sim.current_state()
        print(f"t={s.time:5.2f}  y={s.position[1]:7.3f}  vy={s.velocity[1]:7.3f}")

for bounce in sim.records():
    print(f"bounce t={bounce.t:.3f}  v_b={bounce.v_at_ground:.3f}  v_after={bounce.v_after:.3f}")
