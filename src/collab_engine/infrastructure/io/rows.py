"""Table names, column lists and outbound row shapes for the backend schema."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ...domain.models import ReliabilityMetrics
from ...exceptions import DataAccessError
from .validation import IncomingDataError

USERS_TABLE = "users"
COLLABS_TABLE = "collabs"
MESSAGES_TABLE = "messages"

MESSAGE_COLUMNS = "created_at,sender_id,receiver_id"
COLLAB_STATUS_COLUMNS = "status"


def reliability_row(metrics: ReliabilityMetrics) -> dict[str, object]:
    """Profile columns written after a reliability recomputation."""
    return {
        "reliability_score": metrics.total_score,
        "avg_response_time": metrics.avg_response_time_hours,
        "completion_rate": metrics.completion_rate_percent,
        "abandoned_collabs": metrics.abandoned_count,
    }


def parse_rows[RecordT](
    rows: Iterable[object],
    parser: Callable[[object], RecordT],
    operation: str,
) -> list[RecordT]:
    """Parse every row, reporting the first invalid one as a data-access failure."""
    try:
        return [parser(row) for row in rows]
    except IncomingDataError as exc:
        raise DataAccessError(operation, str(exc)) from exc
