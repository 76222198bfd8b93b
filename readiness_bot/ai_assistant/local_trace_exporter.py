import json
import threading
from pathlib import Path
from typing import Optional, TextIO, Union

from agents import Span, Trace, set_trace_processors
from agents.tracing.processor_interface import TracingExporter
from agents.tracing.processors import BatchTraceProcessor
from loguru import logger


class JsonLinesTraceExporter(TracingExporter):
    """Appends remote advisor traces and spans to a local JSON-lines file instead of uploading them."""

    def __init__(self, filepath: Path):
        super().__init__()
        self.filepath = filepath
        self._file: Optional[TextIO] = None
        self._lock = threading.Lock()

    def export(self, items: list[Union[Trace, Span]]) -> None:
        with self._lock:
            try:
                if self._file is None:
                    self.filepath.parent.mkdir(parents=True, exist_ok=True)
                    self._file = open(self.filepath, "a", encoding="utf-8")
                for item in items:
                    exported = item.export()
                    self._file.write((json.dumps(exported, default=str) if exported else str(item)) + "\n")
                self._file.flush()
            except OSError as e:
                logger.error(f"Failed to write traces to {self.filepath}: {e}")

    def shutdown(self) -> None:
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None


def configure_local_tracing(filepath: Path) -> None:
    """Route every ``agents`` SDK trace to ``filepath``."""
    set_trace_processors([BatchTraceProcessor(exporter=JsonLinesTraceExporter(filepath))])
    logger.info(f"Remote advisor traces are written to {filepath}")
