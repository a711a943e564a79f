"""Evaluate a forward model at every grid point and build the residual table."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import Callable, Iterable, Mapping

import time

from ..data.observations import ObservationSet
from ..errors import IntegrationError, InvalidInputError
from ..models.base_model import BaseModel
from .parameter_space import ParameterSpace
from .residuals import Scorer, sum_squared_residuals
from .results_store import GridEvaluation, ResidualTable
from .strategies.grid_search import GridSearchStrategy

Callback = Callable[[GridEvaluation], None]

# Failures local to one grid point; anything else aborts the search.
_POINT_FAILURES = (IntegrationError, ArithmeticError)


@dataclass
class ParameterGridEvaluator:
    """Drive a grid search: generate grid points, score each one, fill the residual table."""

    model: BaseModel
    parameter_space: ParameterSpace
    scorer: Scorer = sum_squared_residuals
    max_workers: int = 1
    log_path: Path | None = None
    callbacks: Iterable[Callback] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self._log_lock = Lock()

    def evaluate(self, observations: ObservationSet) -> ResidualTable:
        """Score every grid point against ``observations``; one table entry per point."""
        strategy = GridSearchStrategy(self.parameter_space)
        total_points = strategy.total_points()
        parameter_names = self.parameter_space.names
        self._check_parameter_names(parameter_names)

        table = ResidualTable(parameter_names=parameter_names, size=total_points)
        worker_count = max(1, self.max_workers)

        started = time.perf_counter()
        self._log(
            f"Starting grid search for model '{self.model.name}' over {total_points} points "
            f"({', '.join(parameter_names)}) with max_workers={worker_count}"
        )

        if worker_count > 1:
            self._run_parallel(strategy, observations, table, total_points, worker_count)
        else:
            self._run_sequential(strategy, observations, table, total_points)

        duration = time.perf_counter() - started
        failures = len(table.failures())
        self._log(f"Completed grid search in {duration:.2f} seconds ({failures} failed points)")
        return table

    # Execution helpers -------------------------------------------------

    def _run_sequential(
        self,
        strategy: GridSearchStrategy,
        observations: ObservationSet,
        table: ResidualTable,
        total_points: int,
    ) -> None:
        for index, parameters in enumerate(strategy):
            self._record(table, self._process_point(index, total_points, parameters, observations))

    def _run_parallel(
        self,
        strategy: GridSearchStrategy,
        observations: ObservationSet,
        table: ResidualTable,
        total_points: int,
        max_workers: int,
    ) -> None:
        iterator = enumerate(strategy)

        def submit_next(pool: ThreadPoolExecutor, futures: set) -> bool:
            try:
                index, parameters = next(iterator)
            except StopIteration:
                return False
            futures.add(pool.submit(self._process_point, index, total_points, parameters, observations))
            return True

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: set = set()
            for _ in range(max_workers):
                if not submit_next(executor, futures):
                    break

            while futures:
                for future in as_completed(list(futures)):
                    futures.remove(future)
                    try:
                        evaluation = future.result()
                    except Exception:
                        for pending in futures:
                            pending.cancel()
                        raise
                    self._record(table, evaluation)
                    submit_next(executor, futures)
                    break

    def _process_point(
        self,
        index: int,
        total_points: int,
        parameters: Mapping[str, float],
        observations: ObservationSet,
    ) -> GridEvaluation:
        try:
            predicted = self.model.predict(observations.x, **parameters)
        except _POINT_FAILURES as exc:
            self._log(f"[{index + 1}/{total_points}] {dict(parameters)} error: {exc}")
            return GridEvaluation(index=index, parameters=dict(parameters), sse=float("inf"), error=str(exc))
        sse = self.scorer(predicted, observations.y)
        return GridEvaluation(index=index, parameters=dict(parameters), sse=float(sse))

    def _record(self, table: ResidualTable, evaluation: GridEvaluation) -> None:
        table.record(evaluation)
        for callback in self.callbacks:
            callback(evaluation)

    # Utilities ---------------------------------------------------------

    def _check_parameter_names(self, names: Iterable[str]) -> None:
        unknown = [name for name in names if name not in self.model.parameter_names]
        if unknown:
            raise InvalidInputError(
                f"Grid parameters not accepted by model '{self.model.name}': {', '.join(unknown)}"
            )

    def _log(self, message: str) -> None:
        if not self.log_path:
            return
        timestamp = datetime.now(UTC).isoformat()
        line = f"{timestamp} {message}\n"
        with self._log_lock:
            path = Path(self.log_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line)
