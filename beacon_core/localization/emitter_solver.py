"""
Emitter Position Solver (3-Beacon Trilateration).

Estimates the emitter's (x, y) on the plane from three known beacon
positions and three measured distances, minimizing the sum of squared
distance residuals with Levenberg-Marquardt.

Collinear beacons leave the normal equations rank-deficient across the
beacon line. The damping term keeps every step solvable, so the solve
still terminates with a best estimate; precision across the line is then
limited. This is reported through geometry_score, not as a failure.
"""

from typing import List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass, fields
import logging

import numpy as np

from beacon_core.proto.emitter_result import EmitterEstimate
from beacon_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


@dataclass
class EmitterSolverConfig:
    """
    Configuration for the emitter solver.

    Attributes:
        max_iterations: Iteration cap (safety bound against non-convergence)
        convergence_tol: Stop when an accepted step is shorter than this
        initial_damping: Starting Levenberg-Marquardt lambda
        min_damping: Lower clamp for lambda
        max_damping: Upper clamp for lambda; reaching it means no further progress
        min_geometry_score: Geometry scores below this are logged as degenerate
    """

    max_iterations: int = 100
    convergence_tol: float = 1e-10
    initial_damping: float = 1e-3
    min_damping: float = 1e-12
    max_damping: float = 1e10
    min_geometry_score: float = 0.01

    @classmethod
    def from_dict(cls, values: Mapping) -> "EmitterSolverConfig":
        """Build from a config dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


class EmitterSolver:
    """
    Solve emitter position from three beacon distances.

    Usage:
        solver = EmitterSolver(EmitterSolverConfig())
        estimate = solver.estimate(
            [(-500.0, -200.0), (100.0, -100.0), (500.0, 100.0)],
            [538.516, 141.421, 509.902],
        )
        print(f"Emitter at ({estimate.x}, {estimate.y})")
    """

    def __init__(
        self,
        config: Optional[EmitterSolverConfig] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize emitter solver.

        Args:
            config: Solver configuration (uses defaults if None)
            metrics: Metrics collector (global collector if None)
        """
        self.config = config or EmitterSolverConfig()
        self.metrics = metrics or get_metrics()

    def estimate(
        self,
        known_positions: Sequence[Tuple[float, float]],
        distances: Sequence[float],
    ) -> EmitterEstimate:
        """
        Estimate emitter position.

        Args:
            known_positions: Three (x, y) beacon positions
            distances: Three measured distances, same order as known_positions

        Returns:
            EmitterEstimate with the best point found

        Raises:
            ValueError: If not exactly three positions and distances are given
                (callers validate measurements before solving)
        """
        if len(known_positions) != 3 or len(distances) != 3:
            raise ValueError(
                f"Need exactly 3 positions and 3 distances, "
                f"got {len(known_positions)} and {len(distances)}"
            )

        beacons = np.asarray(known_positions, dtype=float)
        measured = np.asarray(distances, dtype=float)

        geometry_score = self._compute_geometry_score(beacons)
        if geometry_score < self.config.min_geometry_score:
            logger.warning(
                "Degenerate beacon geometry (score %.3f); estimate precision is limited",
                geometry_score,
            )

        x, iterations, converged = self._solve_lm(beacons, measured)

        residuals = self._residuals(x, beacons, measured)
        residual_rms = float(np.sqrt(np.mean(residuals ** 2)))

        self.metrics.increment('solver_runs')
        self.metrics.record_histogram('solver_iterations', iterations)
        self.metrics.record_histogram('solver_residual_rms', residual_rms)
        if not converged:
            self.metrics.increment('solver_not_converged')
            logger.warning(
                "Solver did not converge after %d iterations at (%.6f, %.6f), residual %.6g",
                iterations, x[0], x[1], residual_rms,
            )

        return EmitterEstimate(
            x=float(x[0]),
            y=float(x[1]),
            residual_rms=residual_rms,
            iterations=iterations,
            converged=converged,
            geometry_score=geometry_score,
        )

    def _solve_lm(
        self,
        beacons: np.ndarray,
        measured: np.ndarray,
    ) -> Tuple[np.ndarray, int, bool]:
        """
        Levenberg-Marquardt iteration from the beacon centroid.

        Returns:
            Tuple of (position, iterations, converged)
        """
        x = beacons.mean(axis=0)
        residuals, jacobian = self._linearize(x, beacons, measured)
        cost = float(residuals @ residuals)
        damping = self.config.initial_damping

        iteration = 0
        for iteration in range(1, self.config.max_iterations + 1):
            if cost == 0.0:
                return x, iteration - 1, True

            # (J^T J + lambda I) delta = -J^T r
            JTJ = jacobian.T @ jacobian
            JTr = jacobian.T @ residuals

            try:
                delta_x = np.linalg.solve(JTJ + damping * np.eye(2), -JTr)
            except np.linalg.LinAlgError:
                delta_x = np.linalg.lstsq(JTJ, -JTr, rcond=None)[0]

            candidate = x + delta_x
            candidate_residuals, candidate_jacobian = self._linearize(candidate, beacons, measured)
            candidate_cost = float(candidate_residuals @ candidate_residuals)

            if candidate_cost < cost:
                x = candidate
                residuals, jacobian, cost = candidate_residuals, candidate_jacobian, candidate_cost
                damping = max(damping / 10.0, self.config.min_damping)

                if np.linalg.norm(delta_x) < self.config.convergence_tol:
                    return x, iteration, True
            else:
                if damping >= self.config.max_damping:
                    # No step improves the cost: a local minimum to float precision,
                    # unless the cost overflowed and no step could ever compare lower
                    return x, iteration, bool(np.isfinite(cost))
                damping = min(damping * 10.0, self.config.max_damping)

            logger.debug(
                "LM iter %d: x=(%.6f, %.6f) cost=%.6g lambda=%.3g",
                iteration, x[0], x[1], cost, damping,
            )

        return x, iteration, False

    @staticmethod
    def _residuals(x: np.ndarray, beacons: np.ndarray, measured: np.ndarray) -> np.ndarray:
        """Computed minus measured distance for each beacon."""
        return np.linalg.norm(x - beacons, axis=1) - measured

    @staticmethod
    def _linearize(
        x: np.ndarray,
        beacons: np.ndarray,
        measured: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Residuals and Jacobian at x.

        Jacobian row i is the unit vector from beacon i to x; it is left at
        zero when x coincides with the beacon.
        """
        offsets = x - beacons
        computed = np.linalg.norm(offsets, axis=1)
        residuals = computed - measured

        jacobian = np.zeros((3, 2))
        for i in range(3):
            if computed[i] > 1e-12:
                jacobian[i] = offsets[i] / computed[i]

        return residuals, jacobian

    @staticmethod
    def _compute_geometry_score(beacons: np.ndarray) -> float:
        """
        Geometry health score (0-1).

        Triangle area normalized by the squared longest side, scaled so an
        equilateral triangle scores 1 and collinear beacons score 0.
        """
        p0, p1, p2 = beacons
        area = 0.5 * abs((p1[0] - p0[0]) * (p2[1] - p0[1]) -
                         (p2[0] - p0[0]) * (p1[1] - p0[1]))

        longest_sq = max(
            float(np.sum((p1 - p0) ** 2)),
            float(np.sum((p2 - p1) ** 2)),
            float(np.sum((p0 - p2) ** 2)),
        )
        if longest_sq == 0.0:
            return 0.0

        equilateral_ratio = np.sqrt(3.0) / 4.0
        score = (area / longest_sq) / equilateral_ratio

        return float(np.clip(score, 0.0, 1.0))


def distances_from(point: Tuple[float, float], known_positions: List[Tuple[float, float]]) -> List[float]:
    """
    Exact distances from a point to each known position.

    Useful for building noiseless measurements.
    """
    px, py = point
    return [float(np.hypot(px - bx, py - by)) for bx, by in known_positions]
