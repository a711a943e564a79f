"""End-to-end grid fits for the exponential, sine and logistic models."""

import json

import numpy as np
import pytest

from gridfit import (
    ExponentialGrowth,
    FitConfig,
    InvalidInputError,
    LogisticGrowth,
    NoValidFitError,
    ObservationSet,
    SineWave,
    fit_grid,
    load_config,
    run_from_config,
)
from gridfit.optimization import GridSearchStrategy, ParameterDefinition, ParameterSpace


class TestExponentialFit:
    """Single-parameter search over the growth rate."""

    def test_three_point_scenario(self, growth_observations):
        space = ParameterSpace.from_definitions(
            [ParameterDefinition(name="r", lower_bound=0.1, upper_bound=0.3, step=0.05)]
        )
        outcome = fit_grid(ExponentialGrowth.from_observations(growth_observations), growth_observations, space)
        assert outcome.best.parameters == {"r": 0.2}
        assert outcome.best.sse == pytest.approx(0.0, abs=1e-3)
        assert len(outcome.table) == 5

    @pytest.mark.parametrize("true_rate", [-0.4, 0.05, 0.35, 0.9])
    def test_noise_free_on_grid_rate_recovered_exactly(self, true_rate):
        t = np.arange(0.0, 8.0)
        obs = ObservationSet.from_arrays(t, 5.0 * np.exp(true_rate * t))
        grid = {"r": [round(-1.0 + 0.05 * step, 2) for step in range(41)]}
        outcome = fit_grid(ExponentialGrowth.from_observations(obs), obs, grid)
        assert outcome.best.parameters["r"] == true_rate
        assert outcome.best.sse == 0.0
        assert sum(1 for score in outcome.table.scores() if score == 0.0) == 1

    def test_initial_population_defaults_to_first_observation(self, growth_observations):
        outcome = fit_grid(ExponentialGrowth(), growth_observations, {"r": [0.1, 0.15, 0.2, 0.25, 0.3]})
        assert outcome.best.parameters == {"r": 0.2}
        assert outcome.best.sse == pytest.approx(0.0, abs=1e-3)

    def test_explicit_initial_population_kept(self, growth_observations):
        outcome = fit_grid(ExponentialGrowth(N0=20.0), growth_observations, {"r": [-0.5, -0.3, 0.2]})
        assert outcome.best.parameters == {"r": -0.3}

    def test_searched_initial_population_not_anchored(self, growth_observations):
        outcome = fit_grid(
            ExponentialGrowth(), growth_observations, {"N0": [5.0, 10.0], "r": [0.2, 0.3]}
        )
        assert outcome.best.parameters == {"N0": 10.0, "r": 0.2}

    def test_default_grid_used_when_omitted(self, growth_observations):
        outcome = fit_grid(ExponentialGrowth(), growth_observations)
        assert len(outcome.table) == 201
        assert outcome.best.parameters["r"] == pytest.approx(0.2)
        assert outcome.table.parameter_names == ("r",)

    def test_empty_grid(self, growth_observations):
        with pytest.raises(InvalidInputError):
            fit_grid(ExponentialGrowth(N0=10.0), growth_observations, {})

    def test_divergence_everywhere_raises(self, growth_observations):
        with pytest.raises(NoValidFitError):
            fit_grid(ExponentialGrowth(N0=10.0), growth_observations, {"r": [1000.0, 2000.0]})


class TestSineFit:
    """Phenology: only the phase is searched."""

    def test_phase_recovered(self):
        model = SineWave(A=1.0, T=365.0, c=0.0)
        days = np.arange(0.0, 365.0, 15.0)
        obs = ObservationSet.from_arrays(days, model.predict(days, b=1.2))
        grid = {"b": [round(0.1 * step, 1) for step in range(63)]}
        outcome = fit_grid(model, obs, grid)
        assert outcome.best.parameters["b"] == 1.2
        assert outcome.best.sse == 0.0

    def test_phase_recovered_on_default_grid(self):
        model = SineWave(A=2.0, T=30.0, c=1.0)
        days = np.arange(0.0, 60.0, 2.0)
        obs = ObservationSet.from_arrays(days, model.predict(days, b=1.2))
        outcome = fit_grid(model, obs)
        assert len(outcome.table) == len(model.get_param_grid()["b"])
        assert outcome.best.parameters["b"] == pytest.approx(1.2)
        assert outcome.best.sse == pytest.approx(0.0, abs=1e-12)


class TestLogisticFit:
    """Two-parameter search over r and K with the ODE model."""

    def test_two_by_two_scenario(self, logistic_observations):
        outcome = fit_grid(
            LogisticGrowth(N0=10.0),
            logistic_observations,
            {"r": [0.5, 1.0], "K": [100, 150]},
        )
        assert outcome.best.values == (1.0, 150)
        assert outcome.best.index == 3

    def test_parallel_scenario(self, logistic_observations):
        outcome = fit_grid(
            LogisticGrowth(N0=10.0),
            logistic_observations,
            {"r": [0.5, 1.0], "K": [100, 150]},
            max_workers=4,
        )
        assert outcome.best.values == (1.0, 150)

    def test_all_points_fail(self, logistic_observations):
        with pytest.raises(NoValidFitError):
            fit_grid(LogisticGrowth(N0=10.0), logistic_observations, {"r": [1.0], "K": [0.0]})


class TestConfigDrivenRun:
    """FitConfig loading and run_from_config."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "fit.yaml"
        path.write_text(
            "model: logistic\n"
            "fixed:\n"
            "  N0: 10\n"
            "model_options:\n"
            "  method: LSODA\n"
            "parameters:\n"
            "  r: {lower_bound: 0.5, upper_bound: 1.0, step: 0.5}\n"
            "  K: [100, 150]\n"
            "max_workers: 2\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.model == "logistic"
        assert config.fixed == {"N0": 10.0}
        assert config.max_workers == 2
        model = config.build_model()
        assert model.method == "LSODA"
        assert GridSearchStrategy(config.build_parameter_space()).total_points() == 4

    def test_load_json(self, tmp_path):
        path = tmp_path / "fit.json"
        path.write_text(json.dumps({"model": "exponential", "parameters": {"r": [0.1, 0.2]}}), encoding="utf-8")
        assert load_config(path).to_mapping() == {
            "model": "exponential",
            "parameters": {"r": [0.1, 0.2]},
            "max_workers": 1,
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    @pytest.mark.parametrize(
        "mapping",
        [
            {"parameters": {"r": [0.1]}},
            {"model": "exponential"},
            {"model": "exponential", "parameters": {"r": [0.1]}, "colour": "red"},
            {"model": "exponential", "parameters": {"r": [0.1]}, "max_workers": 0},
        ],
    )
    def test_invalid_mappings(self, mapping):
        with pytest.raises(InvalidInputError):
            FitConfig.from_mapping(mapping)

    def test_initial_population_taken_from_first_observation(self, growth_observations):
        config = FitConfig.from_mapping(
            {"model": "exponential", "parameters": {"r": {"lower_bound": 0.1, "upper_bound": 0.3, "step": 0.05}}}
        )
        outcome = run_from_config(config, growth_observations)
        assert outcome.best.parameters == {"r": 0.2}

    def test_run_exports_artifacts(self, tmp_path, logistic_observations):
        config = FitConfig.from_mapping(
            {
                "model": "logistic",
                "parameters": {"r": [0.5, 1.0], "K": [100, 150]},
                "output_root": str(tmp_path / "fits"),
            }
        )
        outcome = run_from_config(config, logistic_observations, run_id="demo")
        run_dir = tmp_path / "fits" / "demo"
        assert outcome.best.values == (1.0, 150)
        for name in ("results.csv", "results.json", "summary.json", "run.log"):
            assert (run_dir / name).exists()
        summary = json.loads((run_dir / "summary.json").read_text(encoding="utf-8"))
        assert summary["best"]["parameters"] == {"r": 1.0, "K": 150}
