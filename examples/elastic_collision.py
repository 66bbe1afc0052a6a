from physicsim.simulations import CollisionsSimulation, CollisionsConfig
from physicsim.core import kinetic_energy

sim = CollisionsSimulation(CollisionsConfig(mass_a=1.0, mass_b=2.0,
                                            velocity_a=(3.0, 0.0, 0.0), velocity_b=(-1.0, 0.0, 0.0),
                                            position_a=(-20.0, 0.0, 0.0), position_b=(20.0, 0.0, 0.0)))

p0 = sim.total_momentum()
ke0 = kinetic_energy([sim.a, sim.b])

for _ in range(60):
    sim.step(1/30)

p1 = sim.total_momentum()
ke1 = kinetic_energy([sim.a, sim.b])

print("p0", p0, "p1", p1, "dp", p1-p0)
print("ke0", ke0, "ke1", ke1, "dke", ke1-ke0)
print("v_final a,b:", sim.a.velocity, sim.b.velocity)
for record in sim.records():
    print("collision", record)
