"""Tests for the instance-suite runner."""

import pandas as pd
import pytest

from satgirgs.config import GeneratorConfig, InstanceConfig
from satgirgs.engine.runner import InstanceRunner


class TestInstanceRunner:
    @pytest.fixture()
    def config(self):
        return InstanceConfig(
            generators=[
                GeneratorConfig(
                    type="satgirg", sizes=[20, 40], count_per_size=2,
                    params={"seed": 5, "parallel": False},
                ),
                GeneratorConfig(type="hyperbolic", sizes=[50], params={"parallel": False}),
            ]
        )

    def test_run_produces_dataframe(self, config):
        df = InstanceRunner(config).run()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 5  # 2 sizes × 2 + 1

    def test_schema_columns(self, config):
        df = InstanceRunner(config).run()
        expected = {
            "instance_name", "instance_generator", "problem_size", "num_nodes",
            "num_edges", "total_multiplicity", "wall_time_seconds", "params",
        }
        assert expected.issubset(set(df.columns))

    def test_instance_names(self, config):
        runner = InstanceRunner(config)
        runner.run()
        assert set(runner.instances) == {
            "satgirg_n20_0", "satgirg_n20_1", "satgirg_n40_0", "satgirg_n40_1",
            "hyperbolic_n50_0",
        }

    def test_repeated_instances_differ(self, config):
        runner = InstanceRunner(config)
        runner.run()
        first = runner.instances["satgirg_n40_0"].weighted_edges()
        second = runner.instances["satgirg_n40_1"].weighted_edges()
        assert first != second

    def test_multiplicity_counts_clauses(self, config):
        df = InstanceRunner(config).run()
        sat = df[df["instance_generator"] == "satgirg"]
        assert (sat["total_multiplicity"] == sat["problem_size"]).all()

    def test_export(self, config, tmp_path):
        config.output_dir = str(tmp_path / "out")
        runner = InstanceRunner(config)
        runner.run()
        files = sorted(p.name for p in (tmp_path / "out").iterdir())
        assert len(files) == 5
        assert "hyperbolic_n50_0.dot" in files
        assert (tmp_path / "out" / "satgirg_n20_0.dot").read_text().startswith("graph girg {")

    def test_unknown_generator(self):
        cfg = InstanceConfig(generators=[GeneratorConfig(type="nope", sizes=[10])])
        with pytest.raises(ValueError, match="Unknown generator"):
            InstanceRunner(cfg).run()
