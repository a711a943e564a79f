"""End-to-end helpers: evaluate a grid, select the best fit, optionally export the run."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Mapping, Sequence

from .config import FitConfig
from .data.observations import ObservationSet
from .models.base_model import BaseModel
from .optimization.evaluator import ParameterGridEvaluator
from .optimization.parameter_space import ParameterSpace
from .optimization.reporting import FitReporter
from .optimization.residuals import Scorer, sum_squared_residuals
from .optimization.results_store import ResidualTable
from .optimization.selector import BestFit, BestFitSelector


@dataclass(frozen=True)
class FitOutcome:
    """Best fit plus the full residual table it was selected from."""

    best: BestFit
    table: ResidualTable

    def reporter(self) -> FitReporter:
        return FitReporter(self.table)


def _anchor_initial_population(
    model: BaseModel,
    space: ParameterSpace,
    observations: ObservationSet,
) -> BaseModel:
    # N0 neither fixed nor searched is taken from the first observation
    if "N0" in model.parameter_names and "N0" not in model.fixed and "N0" not in space.names:
        return model.with_fixed(N0=observations.first[1])
    return model


def fit_grid(
    model: BaseModel,
    observations: ObservationSet,
    grid: ParameterSpace | Mapping[str, Sequence[float]] | None = None,
    *,
    scorer: Scorer = sum_squared_residuals,
    max_workers: int = 1,
    log_path: str | Path | None = None,
) -> FitOutcome:
    """
    Brute-force least-squares search.

    Args:
        model: forward model with any non-searched parameters already fixed.
            An ``N0`` left unset is anchored to the first observed value.
        observations: observed data the predictions are compared against.
        grid: parameter space or a plain ``{name: candidates}`` mapping;
            ``model.get_param_grid()`` is used when omitted.
        scorer: residual score, sum of squared residuals by default.
        max_workers: evaluate grid points on a thread pool when > 1.
        log_path: append timestamped progress lines to this file.

    Raises:
        InvalidInputError: empty grid or parameters unknown to the model.
        DimensionMismatchError: model output length differs from observations.
        NoValidFitError: no grid point produced a finite residual sum.
    """
    if grid is None:
        grid = model.get_param_grid()
    space = grid if isinstance(grid, ParameterSpace) else ParameterSpace.from_grid(grid)
    evaluator = ParameterGridEvaluator(
        model=_anchor_initial_population(model, space, observations),
        parameter_space=space,
        scorer=scorer,
        max_workers=max_workers,
        log_path=Path(log_path) if log_path else None,
    )
    table = evaluator.evaluate(observations)
    best = BestFitSelector().select(table)
    return FitOutcome(best=best, table=table)


def run_from_config(
    config: FitConfig,
    observations: ObservationSet,
    *,
    run_id: str | None = None,
) -> FitOutcome:
    """
    Build model and grid from ``config`` and run the search.

    An initial population ``N0`` that is neither fixed nor searched is set to
    the first observed value. When ``config.output_root`` is set, the run log,
    residual table and summary are written to ``output_root/<run_id>``.
    """
    space = config.build_parameter_space()
    model = _anchor_initial_population(config.build_model(), space, observations)

    run_dir: Path | None = None
    if config.output_root is not None:
        run_name = run_id or datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        run_dir = Path(config.output_root) / run_name
        run_dir.mkdir(parents=True, exist_ok=True)

    evaluator = ParameterGridEvaluator(
        model=model,
        parameter_space=space,
        max_workers=config.max_workers,
        log_path=run_dir / "run.log" if run_dir else None,
    )
    table = evaluator.evaluate(observations)
    if run_dir is not None:
        FitReporter(table).export(run_dir)
    best = BestFitSelector().select(table)
    return FitOutcome(best=best, table=table)
