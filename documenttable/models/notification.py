from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True, slots=True)
class Notification:
    """Toast-style message handed to the notification sink."""
    severity: Severity
    title: str
    description: str = ""
