import datetime as dt
from pathlib import Path
from typing import List, Optional, Sequence, Union

import duckdb
from loguru import logger

from readiness_bot.service.health_analysis.common.data_models import DailyMetrics, UserProfile
from readiness_bot.service.health_analysis.common.db_utils import execute_query, transaction
from readiness_bot.service.health_analysis.common.errors import DuplicateMetricsError

_METRIC_COLUMNS = (
    "sleep_hours",
    "sleep_efficiency",
    "hrv",
    "resting_hr",
    "steps",
    "workout_minutes",
    "training_load",
    "stress_score",
    "mood_score",
    "energy_score",
)


class MetricsRepository:
    """
    DuckDB-backed store for daily metrics and user profiles.

    Daily metrics are append-only: one row per user and date, never updated. Profiles are
    stored as JSON and upserted. The analysis engine only ever reads from here.
    """

    _METRICS_TABLE_NAME = "daily_metrics"
    _PROFILE_TABLE_NAME = "user_profile"

    def __init__(self, db_path: Union[str, Path] = ":memory:"):
        """
        Args:
            db_path: DuckDB database file, or ":memory:" for a throwaway store.
        """
        self.db_path = db_path
        if isinstance(db_path, Path):
            db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(str(db_path))
        self._initialize_tables()
        logger.info(f"Initialized MetricsRepository at {db_path}")

    def _initialize_tables(self) -> None:
        self.conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self._METRICS_TABLE_NAME} (
                user_id BIGINT,
                date DATE,
                sleep_hours DOUBLE,
                sleep_efficiency DOUBLE,
                hrv DOUBLE,
                resting_hr DOUBLE,
                steps INTEGER,
                workout_minutes INTEGER,
                training_load DOUBLE,
                stress_score DOUBLE,
                mood_score INTEGER,
                energy_score INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (user_id, date)
            )
            """
        )
        self.conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self._PROFILE_TABLE_NAME} (
                user_id BIGINT PRIMARY KEY,
                profile_json JSON,
                updated_at TIMESTAMP
            )
            """
        )

    def close(self) -> None:
        self.conn.close()

    def has_metrics(self, user_id: int, date: Union[dt.date, str]) -> bool:
        if isinstance(date, str):
            date = dt.date.fromisoformat(date)
        rows = execute_query(
            self.conn,
            f"SELECT COUNT(*) AS n FROM {self._METRICS_TABLE_NAME} WHERE user_id = ? AND date = ?",
            params=(user_id, date),
        )
        return rows[0]["n"] > 0

    def add_daily_metrics(self, user_id: int, metrics: DailyMetrics) -> None:
        """
        Store one day of metrics.

        Raises:
            DuplicateMetricsError: If metrics for that date were already recorded.
        """
        if self.has_metrics(user_id, metrics.date):
            raise DuplicateMetricsError(user_id, metrics.date)

        logger.info(f"Adding daily metrics for user {user_id} on {metrics.date}")
        columns = ", ".join(("user_id", "date") + _METRIC_COLUMNS)
        placeholders = ", ".join("?" for _ in range(len(_METRIC_COLUMNS) + 2))
        params = [user_id, metrics.date] + [getattr(metrics, column) for column in _METRIC_COLUMNS]
        execute_query(
            self.conn,
            f"INSERT INTO {self._METRICS_TABLE_NAME} ({columns}) VALUES ({placeholders})",
            params=params,
            fetch=False,
        )

    def add_many(self, user_id: int, history: Sequence[DailyMetrics], skip_existing: bool = True) -> int:
        """Store several days at once. Returns the number of days written."""
        written = 0
        with transaction(self.conn):
            for metrics in history:
                if skip_existing and self.has_metrics(user_id, metrics.date):
                    continue
                self.add_daily_metrics(user_id, metrics)
                written += 1
        logger.info(f"Stored {written} of {len(history)} days for user {user_id}")
        return written

    def load_metrics(self, user_id: int, limit: Optional[int] = None) -> List[DailyMetrics]:
        """
        Load a user's metrics history.

        Args:
            user_id: User ID.
            limit: Only return the most recent ``limit`` days.

        Returns:
            Daily metrics ordered oldest to newest.
        """
        query = f"""
            SELECT date, {", ".join(_METRIC_COLUMNS)}
            FROM {self._METRICS_TABLE_NAME}
            WHERE user_id = ?
            ORDER BY date DESC
        """
        if limit is not None:
            query += f" LIMIT {int(limit)}"

        rows = execute_query(self.conn, query, params=(user_id,))
        logger.debug(f"Loaded {len(rows)} days of metrics for user {user_id}")
        return [DailyMetrics(**row) for row in reversed(rows)]

    def load_profile(self, user_id: int) -> UserProfile:
        """Load the user's profile, or the default profile if none was saved."""
        rows = execute_query(
            self.conn,
            f"SELECT profile_json FROM {self._PROFILE_TABLE_NAME} WHERE user_id = ?",
            params=(user_id,),
        )
        if not rows:
            logger.debug(f"No profile stored for user {user_id}, using defaults")
            return UserProfile.default()
        return UserProfile.model_validate_json(rows[0]["profile_json"])

    def save_profile(self, user_id: int, profile: UserProfile) -> None:
        logger.info(f"Saving profile for user {user_id}")
        execute_query(
            self.conn,
            f"INSERT OR REPLACE INTO {self._PROFILE_TABLE_NAME} (user_id, profile_json, updated_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP)",
            params=(user_id, profile.model_dump_json()),
            fetch=False,
        )
