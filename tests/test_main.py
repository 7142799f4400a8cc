import pytest
import yaml

import main as main_module
from config import DEFAULT_CARVE_MAX_ITERATIONS
from graph import AdjacencyIndex
from grid import OccupancyGrid
from main import QueryResult, instance_kind, load_config, main, run_carving, run_queries


@pytest.fixture
def reference_config(project_root):
    return load_config(project_root / "problem_instance.yaml")


@pytest.fixture
def grid_config(project_root):
    return load_config(project_root / "grid_instance.yaml")


def test_reference_instance_queries(reference_config):
    index, results = run_queries(reference_config)
    assert isinstance(index, AdjacencyIndex)
    assert len(results) == 3

    first = results[0]
    assert first.path == ["e", "f", "c", "a"]
    assert first.route == ["a", "c", "f", "e"]
    assert first.cost == 20

    trivial = results[2]
    assert trivial.path == ["d"]
    assert trivial.cost == 0


def test_grid_instance_queries(grid_config):
    grid, results = run_queries(grid_config)
    assert isinstance(grid, OccupancyGrid)
    for result in results:
        assert result.path is not None
        assert result.path[0] == result.end
        assert result.path[-1] == result.start
        assert not any(grid.is_blocked(cell) for cell in result.path)


def test_unreachable_grid_query():
    config = {
        "grid": {"shape": [5, 5], "obstacles": [[3, 4], [4, 3]]},
        "queries": [[[0, 0], [4, 4]]],
    }
    _, results = run_queries(config)
    assert results == [QueryResult(start=(0, 0), end=(4, 4), path=None, cost=None)]
    assert results[0].route == []


def test_iteration_cap_override(reference_config):
    _, results = run_queries(reference_config, max_iterations=1)
    assert results[0].path is None
    assert results[2].path == ["d"]


def test_instance_kind_requires_exactly_one_section():
    assert instance_kind({"graph": {"edges": []}}) == "graph"
    assert instance_kind({"grid": {"shape": [2, 2]}}) == "grid"
    with pytest.raises(ValueError):
        instance_kind({})
    with pytest.raises(ValueError):
        instance_kind({"graph": {"edges": []}, "grid": {"shape": [2, 2]}})


def test_carving_needs_a_grid(reference_config):
    with pytest.raises(ValueError):
        run_carving(reference_config, count=3, seed=1)


def test_carving_falls_back_to_default_cap(monkeypatch):
    caps = []

    def fake_carve(grid, goals, max_iterations=None):
        caps.append(max_iterations)
        return [None for _ in goals]

    monkeypatch.setattr(main_module, "carve_paths", fake_carve)
    run_carving({"grid": {"shape": [4, 4]}, "max_iterations": None}, count=1, seed=1)
    run_carving({"grid": {"shape": [4, 4]}}, count=1, seed=1)
    run_carving({"grid": {"shape": [4, 4]}, "max_iterations": 50}, count=1, seed=1)
    run_carving({"grid": {"shape": [4, 4]}}, count=1, seed=1, max_iterations=7)
    assert caps == [DEFAULT_CARVE_MAX_ITERATIONS, DEFAULT_CARVE_MAX_ITERATIONS, 50, 7]


def test_carving_is_seeded(grid_config):
    _, first = run_carving(grid_config, count=10, seed=3)
    _, second = run_carving(grid_config, count=10, seed=3)
    assert len(first) == 10
    assert first == second


def test_cli_prints_routes(project_root, capsys):
    main(["--config", str(project_root / "problem_instance.yaml")])
    out = capsys.readouterr().out
    assert "[Query 1] a -> e: cost 20" in out
    assert "a -> c -> f -> e" in out


def test_cli_reports_missing_path(tmp_path, capsys):
    instance = tmp_path / "instance.yaml"
    instance.write_text(
        yaml.safe_dump(
            {"graph": {"nodes": ["x"], "edges": [["a", "b", 1]]}, "queries": [["a", "x"]]}
        ),
        encoding="utf-8",
    )
    main(["--config", str(instance)])
    assert "[Query 1] a -> x: no path" in capsys.readouterr().out


def test_cli_carve_and_plot(project_root, tmp_path, capsys):
    plot = tmp_path / "carved.png"
    main(
        [
            "--config",
            str(project_root / "grid_instance.yaml"),
            "--carve",
            "5",
            "--seed",
            "11",
            "--plot",
            str(plot),
        ]
    )
    assert "of 5 goal pairs" in capsys.readouterr().out
    assert plot.exists()


def test_cli_plots_graph(project_root, tmp_path):
    plot = tmp_path / "graph.png"
    main(["--config", str(project_root / "problem_instance.yaml"), "--plot", str(plot)])
    assert plot.exists()
