from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Query contract of the master list fetch.

    The table always asks for the full, unfiltered list newest first and
    without employee images; filtering happens client-side.
    """
    where_condition: str = ""
    order_by: str = "REF_SEQ_NO DESC"
    include_emp_image: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "WhereCondition": self.where_condition,
            "Orderby": self.order_by,
            "IncludeEmpImage": self.include_emp_image,
        }
