import io
import json

import pytest

from physicsim.renderer import BufferedRenderer, DebugRenderer, NullRenderer
from physicsim.simulations import SimulationKind, create_simulation


class _ChartOnly(NullRenderer):
    surfaces = frozenset({SimulationKind.TWO_D})


def test_debug_renderer_writes_fields():
    out = io.StringIO()
    sim = create_simulation("collisions")
    DebugRenderer(output=out).render(sim)

    text = out.getvalue()
    assert text.startswith("=== t=0.0000 ===")
    assert "[collisions]" in text
    assert "half_extent=100" in text
    assert "time=" not in text


def test_debug_renderer_quiet_mode():
    out = io.StringIO()
    DebugRenderer(output=out, verbose=False).render(create_simulation("interference"))
    assert "[interference] paused=False" in out.getvalue()
    assert "amplitude" not in out.getvalue()


def test_buffered_frames_are_json_ready():
    sim = create_simulation("snells_law")
    recorder = BufferedRenderer()
    for _ in range(3):
        sim.step(1 / 30)
        recorder.render(sim)

    assert len(recorder.frames) == 3
    frame = recorder.frames[-1]
    assert frame["simulation"] == "snells_law"
    json.dumps(frame)

    recorder.clear()
    assert recorder.frames == []


def test_renderer_refuses_unsupported_surface():
    chart = _ChartOnly()
    chart.render(create_simulation("nuclear_decay"))
    with pytest.raises(TypeError, match="3d"):
        chart.render(create_simulation("projectile"))
