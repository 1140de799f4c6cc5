from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence, Union

from teadoc.api.schemas import DetectionRecord
from teadoc.services.history.controller import HistoryController

LOADING_TEXT = "Loading detection history..."
NO_HISTORY_TEXT = "No detection history available"


class RowKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    RECORD = "record"


@dataclass(frozen=True)
class FormattedTimestamp:
    date: str
    time: str


@dataclass(frozen=True)
class HistoryRow:
    kind: RowKind
    text: str = ""
    record_id: Optional[str] = None
    image_uri: str = ""
    label: str = ""
    score: Optional[float] = None
    ratio: Optional[float] = None
    date: str = ""
    time: str = ""


@dataclass(frozen=True)
class FeatureChip:
    name: str
    selected: bool


@dataclass
class HistoryView:
    title: str
    total_label: str
    greeting: Optional[str]
    chips: List[FeatureChip] = field(default_factory=list)
    rows: List[HistoryRow] = field(default_factory=list)


def format_timestamp(created_at: Union[datetime, str, None]) -> FormattedTimestamp:
    """Split a timestamp into locale-formatted date and time strings."""
    if created_at is None:
        return FormattedTimestamp("", "")
    if isinstance(created_at, str):
        try:
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        except ValueError:
            return FormattedTimestamp(created_at, "")
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone()
    return FormattedTimestamp(created_at.strftime("%x"), created_at.strftime("%X"))


def record_row(record: DetectionRecord) -> HistoryRow:
    ts = format_timestamp(record.created_at)
    return HistoryRow(
        kind=RowKind.RECORD,
        record_id=record.id,
        image_uri=record.image_uri,
        label=record.label,
        score=record.score,
        ratio=record.ratio,
        date=ts.date,
        time=ts.time,
    )


def render_rows(
    records: Sequence[DetectionRecord],
    loading: bool = False,
    error: Optional[str] = None,
) -> List[HistoryRow]:
    """
    Display rows for a record list.

    Loading wins over everything, including stale content. An error is
    shown above whatever records are still held.
    """
    if loading:
        return [HistoryRow(kind=RowKind.LOADING, text=LOADING_TEXT)]

    rows = []
    if error is not None:
        rows.append(HistoryRow(kind=RowKind.ERROR, text=error))
        rows.extend(record_row(r) for r in records)
        return rows

    if not records:
        return [HistoryRow(kind=RowKind.EMPTY, text=NO_HISTORY_TEXT)]

    return [record_row(r) for r in records]


def render(controller: HistoryController) -> HistoryView:
    error = None
    if controller.error:
        error = controller.error_message or "Could not load detection history"

    return HistoryView(
        title=f"Detection History of {controller.category}",
        total_label="" if controller.loading else f"Total Records: {controller.total}",
        greeting=controller.session.greeting if controller.session else None,
        chips=[FeatureChip(name, name == controller.selected_feature) for name in controller.features],
        rows=render_rows(controller.displayed, loading=controller.loading, error=error),
    )
