"""
Stock opname report renderers.

Pure functions over a hydrated session: no storage access, no clock reads.
The generation timestamp of the narrative report is passed in by the caller.

Two encodings are produced:
- tabular: BOM-prefixed CSV for spreadsheet tools
- narrative: plain-text report for reading and printing
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, datetime

from stockopname.core.entities import SessionWithRelations, StockOpnameItem

UTF8_BOM = "\ufeff"
NOT_COMPLETED = "Not completed"
NOT_AVAILABLE = "N/A"
NO_ITEMS = "No items found"
SIGNATURE_PRESENT = "[SIGNATURE DATA PRESENT]"
SIGNATURE_ABSENT = "[NO SIGNATURE]"

TABULAR_HEADERS: tuple[str, ...] = (
    "SKU",
    "Lot Number",
    "Quantity",
    "Scanned At",
    "Location",
    "Location Code",
    "Session Name",
    "User Name",
    "Session Status",
    "Started At",
    "Completed At",
)

_QUOTE_TRIGGERS = (",", '"', "\n")


def format_timestamp(value: datetime) -> str:
    """Format an instant as ``YYYY-MM-DD HH:MM:SS`` in UTC.

    Naive datetimes are taken to be UTC already. Sub-second precision is
    truncated, never rounded.
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%d %H:%M:%S")


def escape_csv_field(value: object) -> str:
    """Quote a field only when it contains a comma, a double quote or a newline."""
    if value is None:
        return ""
    text = str(value)
    if any(trigger in text for trigger in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _csv_line(fields: Iterable[object]) -> str:
    return ",".join(escape_csv_field(field) for field in fields)


def _completed_label(session: SessionWithRelations) -> str:
    if session.completed_at is None:
        return NOT_COMPLETED
    return format_timestamp(session.completed_at)


def render_tabular_report(session: SessionWithRelations) -> str:
    """Render the session's items as BOM-prefixed CSV text.

    One row per item in the order supplied. Session, location and user columns
    repeat on every row. Rows are separated by ``\\n`` with no trailing
    newline; a session without items yields the header line only.
    """
    session_columns = (
        session.location.name,
        session.location.code,
        session.session_name,
        session.user.full_name,
        session.status.value,
        format_timestamp(session.started_at),
        _completed_label(session),
    )

    lines = [_csv_line(TABULAR_HEADERS)]
    for item in session.items:
        lines.append(
            _csv_line(
                (
                    item.sku,
                    item.lot_number,
                    item.quantity,
                    format_timestamp(item.scanned_at),
                    *session_columns,
                )
            )
        )
    return UTF8_BOM + "\n".join(lines)


def _item_line(index: int, item: StockOpnameItem) -> str:
    return (
        f"{index}. SKU: {item.sku} | Lot: {item.lot_number} | "
        f"Qty: {item.quantity} | Scanned: {format_timestamp(item.scanned_at)}"
    )


def render_narrative_report(session: SessionWithRelations, generated_at: datetime) -> str:
    """Render the human-readable session report.

    Sections appear in fixed order: banner, session, location, user, summary,
    signature indicator, itemized list, generation footer.
    """
    location = session.location
    user = session.user

    item_lines = [_item_line(index, item) for index, item in enumerate(session.items, start=1)]
    itemized = "\n".join(item_lines) if item_lines else NO_ITEMS
    signature = SIGNATURE_PRESENT if session.has_signature else SIGNATURE_ABSENT

    sections = [
        "STOCK OPNAME REPORT\n==================",
        "\n".join(
            [
                "Session Information:",
                f"- Session Name: {session.session_name}",
                f"- Session ID: {session.id}",
                f"- Status: {session.status.value.upper()}",
                f"- Started: {format_timestamp(session.started_at)}",
                f"- Completed: {_completed_label(session)}",
            ]
        ),
        "\n".join(
            [
                "Location Information:",
                f"- Location Name: {location.name}",
                f"- Location Code: {location.code}",
                f"- Description: {location.description or NOT_AVAILABLE}",
            ]
        ),
        "\n".join(
            [
                "User Information:",
                f"- Full Name: {user.full_name}",
                f"- Username: {user.username}",
                f"- Email: {user.email}",
            ]
        ),
        "\n".join(
            [
                "Summary:",
                f"- Total Items Scanned: {session.total_items}",
                f"- Total Quantity: {session.total_quantity}",
            ]
        ),
        f"Electronic Signature:\n{signature}",
        f"Itemized List:\n{itemized}",
        "\n".join(
            [
                f"Report Generated: {format_timestamp(generated_at)}",
                "---",
                f"This is a digitally generated report for stock opname session {session.id}.",
            ]
        ),
    ]
    return "\n\n".join(sections)


class IReportRenderer(ABC):
    """Interface for session report encodings."""

    name: str
    media_type: str
    extension: str

    @abstractmethod
    def render(self, session: SessionWithRelations, generated_at: datetime) -> str:
        """Render a hydrated session into report text."""
        pass


class TabularReportRenderer(IReportRenderer):
    """Spreadsheet-friendly CSV export."""

    name = "tabular"
    media_type = "text/csv; charset=utf-8"
    extension = "csv"

    def render(self, session: SessionWithRelations, generated_at: datetime) -> str:
        return render_tabular_report(session)


class NarrativeReportRenderer(IReportRenderer):
    """Printable plain-text export."""

    name = "narrative"
    media_type = "text/plain; charset=utf-8"
    extension = "txt"

    def render(self, session: SessionWithRelations, generated_at: datetime) -> str:
        return render_narrative_report(session, generated_at)
