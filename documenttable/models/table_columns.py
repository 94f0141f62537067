from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class TableColumn:
    """
    Column of the document table.

    'attribute' is the DocumentRecord field used for sorting; columns without
    one (actions) are not sortable.
    """
    id: str
    header: str
    width: int
    attribute: Optional[str] = None
    anchor: str = "w"

    @property
    def sortable(self) -> bool:
        return self.attribute is not None


COLUMNS: Tuple[TableColumn, ...] = (
    TableColumn("ref_no", "Ref No", 80, "ref_seq_no"),
    TableColumn("document", "Document Name", 300, "document_description"),
    TableColumn("uploader", "Uploader", 150, "user_name"),
    TableColumn("channel", "Channel Source", 100, "channel_source"),
    TableColumn("related_to", "Related to", 100, "related_to"),
    TableColumn("category", "Category", 200, "related_category"),
    TableColumn("status", "Status", 100, "document_status"),
    TableColumn("assigned", "Assigned to", 100, "assigned_user"),
    TableColumn("docs", "Docs", 60, "number_of_documents", anchor="e"),
    TableColumn("actions", "Action", 130, None, anchor="center"),
)


def column_by_id(column_id: str) -> Optional[TableColumn]:
    for col in COLUMNS:
        if col.id == column_id:
            return col
    return None
