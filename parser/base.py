# -*- coding: utf-8 -*-
"""
Base Parser Classes

Abstract base classes and Strategy pattern interfaces for usage extraction.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Protocol

from langkeeper_logger import get_logger
from models.locale_table import UsageRecord

logger = get_logger("parser.base")


class UsageStrategy(Protocol):
    """
    Protocol for usage extraction strategies.

    Using Protocol allows structural subtyping without explicit inheritance.
    """

    def parse(self, text: str, file_path: Path) -> List[UsageRecord]:
        """
        Find translation key usages in a file's text.

        Args:
            text: Full file content
            file_path: Path recorded on every UsageRecord

        Returns:
            Usages in file-appearance order, duplicates kept
        """
        ...


class BaseUsageParser(ABC):
    """
    Abstract base class for usage extractors.

    Collects (position, key) hits and turns them into ordered UsageRecords.
    """

    def __init__(self):
        self._hits: List[tuple] = []

    @abstractmethod
    def parse(self, text: str, file_path: Path) -> List[UsageRecord]:
        """Find usages in text."""
        pass

    def _add_hit(self, position: tuple, key: str):
        """Record a key at a sortable position."""
        self._hits.append((position, key))

    def _records(self, file_path: Path) -> List[UsageRecord]:
        """Hits as UsageRecords in position order."""
        ordered = sorted(self._hits, key=lambda hit: hit[0])
        return [UsageRecord(key=key, source_file=Path(file_path)) for _, key in ordered]

    def reset(self):
        """Reset parser state for a new file."""
        self._hits = []
