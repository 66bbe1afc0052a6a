from physicsim.optics import BoxGeometry, RayTracer, critical_angle
import math

glass = BoxGeometry(75, 15, 40, refractive_index=1.5)
tracer = RayTracer([glass])

print("critical angle glass->air:", math.degrees(critical_angle(1.5, 1.0)), "deg")

# Start inside the block, steeper than the critical angle: trapped by TIR
i = math.radians(60)
ray = tracer.trace(origin=(0.0, 0.0, 0.0), direction=(math.sin(i), -math.cos(i), 0.0), medium_index=1.5)

for seg in ray.chain():
    hit = seg.interaction
    if hit is None:
        print(f"depth {seg.depth}: leaves toward {seg.direction}")
        break
    r = "-" if hit.refraction is None else f"{math.degrees(hit.refraction):.2f}"
    print(f"depth {seg.depth}: {hit.kind:10s} i={math.degrees(hit.incidence):6.2f} r={r} "
          f"n1={hit.n1} n2={hit.n2} at {hit.point}")
