import pytest

from edgesim import cli


class _Stop(Exception):
    pass


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.seed == cli.DEFAULT_SEED
    assert args.output_dir is None
    assert args.log_dir is None


def test_parser_seed():
    args = cli.build_parser().parse_args(["--seed", "7", "--output-dir", "figs"])
    assert args.seed == 7
    assert args.output_dir == "figs"


def test_main_threads_seed_into_run(monkeypatch, tmp_path):
    calls = {}

    def fake_edges(config, rng, plot=True, ax=None):
        calls["seed"] = config.seed
        calls["comparison_seed"] = config.comparison.random_state
        raise _Stop

    monkeypatch.setattr(cli, "run_edges_experiment", fake_edges)
    with pytest.raises(_Stop):
        cli.main(["--seed", "5", "--log-dir", str(tmp_path)])

    assert calls == {"seed": 5, "comparison_seed": 5}
    assert list(tmp_path.glob("run_*.log"))
