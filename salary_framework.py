import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field, fields, asdict
import numpy as np
import pandas as pd
from statistical_engine import (
    StatisticalEngine,
    RegressionResult,
    DescriptiveSummary,
    CorrelationStrength,
)
from data_ingestion.record_parser import (
    Record,
    ParseResult,
    IngestionError,
    FAMILY_INFLUENCE_CODES,
    DEFAULT_MAX_RECORDS,
    read_dataset,
)
from sampling.random_sampler import RandomSampler
from reporting.console_report import render_report


logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "career_change_prediction_dataset.csv"

# (label, Record field) in reporting order
PREDICTORS: List[Tuple[str, str]] = [
    ("Salary vs Age", 'age'),
    ("Salary vs Years of Experience", 'years_of_experience'),
    ("Salary vs Job Satisfaction", 'job_satisfaction'),
    ("Salary vs Professional Network Size", 'professional_network_size'),
    ("Salary vs Family Influence", 'family_influence'),
    ("Salary vs Likelihood to Change Occupation", 'likelihood_to_change_occupation'),
]

TARGET = 'salary'

SUMMARY_FIELDS: List[Tuple[str, str]] = [
    ("Age", 'age'),
    ("Years of Experience", 'years_of_experience'),
    ("Salary", 'salary'),
]

RECORD_COLUMNS = [f.name for f in fields(Record)]


class EmptyDatasetError(Exception):
    """Raised when ingestion produced no valid records."""
    pass


@dataclass
class AnalysisConfig:
    data_path: str = DEFAULT_DATA_PATH
    sample_size: int = 1000
    max_records: int = DEFAULT_MAX_RECORDS
    seed: Optional[int] = None
    head_tail_count: int = 10
    weak_threshold: float = 0.3
    strong_threshold: float = 0.7
    log_level: str = "INFO"


@dataclass
class CorrelationAnalysis:
    label: str
    predictor: str
    result: RegressionResult
    strength: CorrelationStrength


@dataclass
class SampleVerification:
    sample_size: int
    distributions: Dict[str, DescriptiveSummary]
    family_influence_percentages: Dict[str, float]
    first_records: List[Record]
    last_records: List[Record]


@dataclass
class AnalysisReport:
    parse_errors: int
    records_loaded: int
    verification: SampleVerification
    analyses: List[CorrelationAnalysis] = field(default_factory=list)


def records_to_frame(records: Sequence[Record]) -> pd.DataFrame:
    """One row per record, in the given order"""
    return pd.DataFrame([asdict(record) for record in records], columns=RECORD_COLUMNS)


class SalaryAnalysisFramework:
    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        engine: Optional[StatisticalEngine] = None,
        sampler: Optional[RandomSampler] = None
    ):
        self.config = config or AnalysisConfig()
        self._validate_config(self.config)
        self.statistical_engine = engine or StatisticalEngine(
            weak_threshold=self.config.weak_threshold,
            strong_threshold=self.config.strong_threshold
        )
        self.sampler = sampler or RandomSampler(seed=self.config.seed)

    def load_records(self) -> ParseResult:
        """Read and parse the configured dataset"""
        logger.info("Reading dataset from %s", self.config.data_path)
        return read_dataset(self.config.data_path, max_records=self.config.max_records)

    def draw_sample(self, records: Sequence[Record]) -> List[Record]:
        """Uniform random subset of the configured size"""
        selected = self.sampler.sample(records, self.config.sample_size)
        logger.info("Drew a sample of %d from %d records", len(selected), len(records))
        return selected

    def verify_sample(self, sample: Sequence[Record]) -> SampleVerification:
        """Descriptive checks on the sample: distributions, category shares, head and tail"""
        if not sample:
            raise EmptyDatasetError("Cannot verify an empty sample")

        frame = records_to_frame(sample)

        distributions = {
            name: self.statistical_engine.summarize(frame[column].to_numpy(dtype=float))
            for name, column in SUMMARY_FIELDS
        }

        counts = frame['family_influence'].value_counts()
        family_influence_percentages = {
            category: float(counts.get(code, 0)) / len(frame) * 100.0
            for category, code in FAMILY_INFLUENCE_CODES.items()
        }

        n = self.config.head_tail_count
        return SampleVerification(
            sample_size=len(frame),
            distributions=distributions,
            family_influence_percentages=family_influence_percentages,
            first_records=list(sample[:n]),
            last_records=list(reversed(sample[-n:])) if n > 0 else []
        )

    def analyze_salary_correlations(self, sample: Sequence[Record]) -> List[CorrelationAnalysis]:
        """Regress salary on every predictor, in fixed order"""
        frame = records_to_frame(sample)
        salaries = frame[TARGET].to_numpy(dtype=float)

        analyses = []
        for label, predictor in PREDICTORS:
            values = frame[predictor].to_numpy(dtype=float)
            result = self.statistical_engine.regress(values, salaries)
            strength = self.statistical_engine.classify_correlation(result.correlation)

            if not np.isfinite(result.correlation):
                logger.warning("%s: correlation is undefined (insufficient variability)", label)

            analyses.append(CorrelationAnalysis(
                label=label,
                predictor=predictor,
                result=result,
                strength=strength
            ))

        return analyses

    def run(self) -> AnalysisReport:
        """Full pipeline: ingest, sample, verify, analyze"""
        parsed = self.load_records()

        if not parsed.records:
            raise EmptyDatasetError(
                f"No valid records found in {self.config.data_path} "
                f"({parsed.failure_count} parse errors)"
            )

        sample = self.draw_sample(parsed.records)

        return AnalysisReport(
            parse_errors=parsed.failure_count,
            records_loaded=len(parsed.records),
            verification=self.verify_sample(sample),
            analyses=self.analyze_salary_correlations(sample)
        )

    def _validate_config(self, config: AnalysisConfig) -> bool:
        """Validate analysis configuration"""
        if config.sample_size < 1:
            raise ValueError("Sample size must be at least 1")

        if config.max_records < 1:
            raise ValueError("Row cap must be at least 1")

        if config.head_tail_count < 0:
            raise ValueError("Head/tail count cannot be negative")

        return True


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Salary correlation analysis over a random sample of the career dataset"
    )
    parser.add_argument("data_path", nargs="?", default=DEFAULT_DATA_PATH)
    args = parser.parse_args(argv)

    config = AnalysisConfig(data_path=args.data_path)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    framework = SalaryAnalysisFramework(config)
    try:
        report = framework.run()
    except IngestionError as e:
        logger.error("%s", e)
        return 2
    except EmptyDatasetError as e:
        print(f"No valid records to analyze: {e}")
        return 1

    print(render_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
