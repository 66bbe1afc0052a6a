import csv
import json
import logging

import pytest

from physicsim.__main__ import main
from physicsim.io import (
    config_from_json, config_to_json, load_config, load_simulation, save_config,
    save_simulation_config, write_csv, export_records,
)
from physicsim.logging_config import setup_logging
from physicsim.simulations import (
    CollisionsSimulation, InterferenceSimulation, ProjectileConfig, SnellsLawSimulation,
)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """setup_logging changes the shared package logger; undo it after each test."""
    logger = logging.getLogger("physicsim")
    yield
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_config_round_trip(tmp_path):
    path = tmp_path / "projectile.json"
    config = ProjectileConfig(velocity=(5.0, 0.0, 10.0), restitution=0.8)
    save_config("projectile", config, str(path))

    data = json.loads(path.read_text())
    assert data == {
        "simulation": "projectile",
        "params": {"velocity": [5.0, 0.0, 10.0], "restitution": 0.8},
    }

    name, loaded = load_config(str(path))
    assert name == "projectile"
    assert loaded == config


def test_missing_params_use_defaults():
    name, config = config_from_json({"simulation": "collisions"})
    assert name == "collisions"
    assert config == CollisionsSimulation.config_class()


def test_invalid_documents_are_rejected():
    with pytest.raises(ValueError, match="simulation"):
        config_from_json({"params": {}})
    with pytest.raises(ValueError, match="Unknown simulation"):
        config_from_json({"simulation": "pendulum"})
    with pytest.raises(ValueError, match="wingspan"):
        config_from_json({"simulation": "projectile", "params": {"wingspan": 3}})


def test_load_simulation_and_save_running_config(tmp_path):
    path = tmp_path / "snell.json"
    path.write_text(json.dumps({"simulation": "snells_law", "params": {"refractive_index": 1.5}}))

    sim = load_simulation(str(path))
    assert isinstance(sim, SnellsLawSimulation)
    assert sim.geometry.refractive_index == 1.5

    sim.update_config(refractive_index=1.33)
    out = tmp_path / "out.json"
    save_simulation_config(sim, str(out))
    assert config_to_json("snells_law", sim.config) == json.loads(out.read_text())


def test_write_csv_checks_row_width(tmp_path):
    path = tmp_path / "rows.csv"
    assert write_csv(str(path), ("a", "b"), [(1, 2), (3, "")]) == 2
    assert path.read_text().splitlines() == ["a,b", "1,2", "3,"]

    with pytest.raises(ValueError):
        write_csv(str(path), ("a", "b"), [(1, 2, 3)])


def test_export_collision_log(tmp_path):
    sim = CollisionsSimulation()
    while not sim.records():
        sim.step(1 / 30)

    path = tmp_path / "collisions.csv"
    assert export_records(sim, str(path)) == 1
    with open(path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == list(sim.CSV_HEADER)
    assert float(rows[1][0]) == pytest.approx(0.5 * 2.5)


def test_export_requires_a_log(tmp_path):
    with pytest.raises(ValueError, match="no exportable records"):
        export_records(InterferenceSimulation(), str(tmp_path / "none.csv"))


def test_setup_logging_levels(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging("DEBUG", log_file=str(log_file))
    assert logger.name == "physicsim"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1

    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_cli_runs_and_exports(tmp_path):
    out = tmp_path / "decay.csv"
    code = main(["nuclear_decay", "--frames", "60", "--dt", "0.1", "--csv", str(out), "--log-level", "WARNING"])
    assert code == 0

    with open(out, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["t", "model", "simulated"]
    assert len(rows) > 2


def test_cli_reads_config(tmp_path, capsys):
    path = tmp_path / "tir.json"
    path.write_text(json.dumps({"simulation": "snells_law", "params": {"refractive_index": 1.5}}))
    assert main(["--config", str(path), "--frames", "1", "--render", "debug", "--log-level", "ERROR"]) == 0
    assert "[snells_law]" in capsys.readouterr().out


def test_cli_requires_a_simulation():
    with pytest.raises(SystemExit):
        main(["--log-level", "ERROR"])
