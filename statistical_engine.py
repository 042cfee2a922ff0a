import logging
import numpy as np
from typing import Sequence, Union
from dataclasses import dataclass
from enum import Enum


logger = logging.getLogger(__name__)

Vector = Union[Sequence[float], np.ndarray]


class CorrelationStrength(Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    UNDEFINED = "undefined"


@dataclass(frozen=True)
class DescriptiveSummary:
    mean: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    correlation: float
    r_squared: float


class StatisticalEngine:
    """Core statistical computations for the salary correlation analysis"""

    def __init__(self, weak_threshold: float = 0.3, strong_threshold: float = 0.7):
        if not 0 <= weak_threshold <= strong_threshold <= 1:
            raise ValueError(
                f"Invalid correlation thresholds: weak={weak_threshold}, strong={strong_threshold}"
            )
        self.weak_threshold = weak_threshold
        self.strong_threshold = strong_threshold

    def summarize(self, values: Vector) -> DescriptiveSummary:
        """Arithmetic mean, minimum and maximum of a non-empty sequence"""
        data = np.asarray(values, dtype=float)
        if data.size == 0:
            raise ValueError("Cannot summarize an empty sequence")

        return DescriptiveSummary(
            mean=float(np.mean(data)),
            minimum=float(np.min(data)),
            maximum=float(np.max(data))
        )

    def regress(self, x: Vector, y: Vector) -> RegressionResult:
        """
        Simple least-squares regression of y on x.

        Variance and covariance use Bessel's correction. The correlation is
        computed in a separate pass over the deviations. Zero variance in
        either input yields NaN or infinite values, which are returned as-is.
        """
        x_data = np.asarray(x, dtype=float)
        y_data = np.asarray(y, dtype=float)

        if x_data.shape != y_data.shape:
            raise ValueError(
                f"Input vectors must be of equal length (got {x_data.size} and {y_data.size})"
            )
        if x_data.size == 0:
            raise ValueError("Cannot regress empty vectors")

        n = x_data.size

        with np.errstate(divide='ignore', invalid='ignore'):
            mean_x = np.sum(x_data) / n
            mean_y = np.sum(y_data) / n

            # First pass: sample variance and covariance
            var_x = np.sum((x_data - mean_x) ** 2) / np.float64(n - 1)
            cov_xy = np.sum((x_data - mean_x) * (y_data - mean_y)) / np.float64(n - 1)

            slope = cov_xy / var_x
            intercept = mean_y - slope * mean_x

            # Second pass: Pearson correlation from raw deviations
            dx = x_data - mean_x
            dy = y_data - mean_y
            r_numerator = np.sum(dx * dy)
            r_denominator = np.sqrt(np.sum(dx ** 2) * np.sum(dy ** 2))
            correlation = r_numerator / r_denominator
            r_squared = correlation ** 2

        if not np.isfinite(correlation):
            logger.debug("Regression over %d points has insufficient variability", n)

        return RegressionResult(
            slope=float(slope),
            intercept=float(intercept),
            correlation=float(correlation),
            r_squared=float(r_squared)
        )

    def classify_correlation(self, correlation: float) -> CorrelationStrength:
        """Bucket |r| into weak, moderate or strong (boundaries go up)"""
        if not np.isfinite(correlation):
            return CorrelationStrength.UNDEFINED

        magnitude = abs(correlation)
        if magnitude < self.weak_threshold:
            return CorrelationStrength.WEAK
        elif magnitude < self.strong_threshold:
            return CorrelationStrength.MODERATE
        else:
            return CorrelationStrength.STRONG
