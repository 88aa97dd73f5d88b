"""Analysis configuration for the dataset quality engine."""

from __future__ import annotations

from dataclasses import dataclass

# Defaults for every bounded sample and fence used by the analyzers
INFERENCE_SAMPLE_SIZE = 100
COLUMN_SAMPLE_SIZE = 20
MIN_OUTLIER_VALUES = 4
IQR_MULTIPLIER = 1.5
MAX_OUTLIER_VALUES = 5
MAX_FORMAT_ISSUE_VALUES = 10
MAX_EXAMPLES = 5
MAJORITY_THRESHOLD = 0.5


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunable limits applied while analyzing a dataset.

    Attributes:
        column_sample_size: Non-missing values per column handed to type
            inference.
        inference_sample_size: Upper bound on the values type inference
            examines out of the sample it receives.
        min_outlier_values: Minimum numeric values before outlier detection
            runs at all.
        iqr_multiplier: Width of the outlier fence in IQR units.
        max_outlier_values: Outlier values retained on each column.
        max_format_issue_values: Failing values retained on each column.
        max_examples: Example values retained on each column.
        majority_threshold: Share of the sample the winning type must exceed.
    """

    column_sample_size: int = COLUMN_SAMPLE_SIZE
    inference_sample_size: int = INFERENCE_SAMPLE_SIZE
    min_outlier_values: int = MIN_OUTLIER_VALUES
    iqr_multiplier: float = IQR_MULTIPLIER
    max_outlier_values: int = MAX_OUTLIER_VALUES
    max_format_issue_values: int = MAX_FORMAT_ISSUE_VALUES
    max_examples: int = MAX_EXAMPLES
    majority_threshold: float = MAJORITY_THRESHOLD

    def validate(self) -> "AnalysisConfig":
        """Check every limit and return self.

        Raises:
            ValueError: If a size or cap is not a positive integer, the fence
                multiplier is negative, or the threshold lies outside [0, 1).
        """
        positive = {
            "column_sample_size": self.column_sample_size,
            "inference_sample_size": self.inference_sample_size,
            "min_outlier_values": self.min_outlier_values,
            "max_outlier_values": self.max_outlier_values,
            "max_format_issue_values": self.max_format_issue_values,
            "max_examples": self.max_examples,
        }
        for name, value in positive.items():
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"'{name}' must be a positive integer, got {value!r}.")

        if self.iqr_multiplier < 0:
            raise ValueError(
                f"'iqr_multiplier' must be non-negative, got {self.iqr_multiplier!r}."
            )
        if not 0 <= self.majority_threshold < 1:
            raise ValueError(
                f"'majority_threshold' must be in [0, 1), got {self.majority_threshold!r}."
            )
        return self


DEFAULT_CONFIG = AnalysisConfig()
