"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for reading the survey documents.

Why is this file needed?
------------------------
1. Responsiveness: Fetching a GeoJSON document (possibly over the network)
   on the main thread would freeze the GUI.
2. Signals: Results and failures are handed back through Qt Signals, so the
   collections are only ever mutated on the GUI thread.

Classes:
    DocumentLoadWorker: Runs one IOManager read in the background.
"""
import logging
from typing import Any, Callable

from PySide6.QtCore import QThread, Signal

from guardiao.model.features import LoadFailure
from guardiao.model.io import IOManager

logger = logging.getLogger(__name__)


class DocumentLoadWorker(QThread):
    # Signals to update the UI from the background
    loaded = Signal(object)
    failed = Signal(str)

    def __init__(self, name: str, source: str, loader: Callable[[str], Any]) -> None:
        super().__init__()
        self.name = name
        self.source = source
        self.loader = loader

    def run(self) -> None:
        logger.info(f"Loading {self.name} in background thread...")
        try:
            result = self.loader(self.source)
        except LoadFailure as e:
            logger.error(f"Error in {self.name} worker: {e}")
            self.failed.emit(str(e))
            return
        except Exception as e:
            # The source must still end up in a terminal state
            logger.exception(f"Unexpected error in {self.name} worker")
            self.failed.emit(f"Failed to load {self.name} data: {e}")
            return
        self.loaded.emit(result)


def territories_worker(source: str) -> DocumentLoadWorker:
    return DocumentLoadWorker("territories", source, IOManager.load_territories)


def alerts_worker(source: str) -> DocumentLoadWorker:
    return DocumentLoadWorker("alerts", source, IOManager.load_alerts)


def evidence_worker(source: str) -> DocumentLoadWorker:
    return DocumentLoadWorker("evidence", source, IOManager.load_evidence)
