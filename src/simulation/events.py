"""Append-only event log of 'HH:MM:SS | message' strings stamped with simulated time."""
import logging
from typing import List

from src.core.formatting import format_hms

logger = logging.getLogger(__name__)


class EventLog:
    def __init__(self):
        self._entries: List[str] = []

    def add(self, current_time: float, message: str) -> str:
        entry = f"{format_hms(current_time)} | {message}"
        self._entries.append(entry)
        logger.info(entry)
        return entry

    def entries(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
