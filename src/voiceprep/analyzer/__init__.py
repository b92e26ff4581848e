from .loudness import (
    DB_FLOOR,
    LevelReport,
    LevelThresholds,
    LoudnessAnalyzer,
    LoudnessMetrics,
    db_from_linear,
    linear_from_db,
    measure_integrated_lufs,
)

__all__ = [
    "DB_FLOOR",
    "LevelReport",
    "LevelThresholds",
    "LoudnessAnalyzer",
    "LoudnessMetrics",
    "db_from_linear",
    "linear_from_db",
    "measure_integrated_lufs",
]
