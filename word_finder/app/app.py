"""Application wiring for the Word Finder project."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from word_finder.core.models import HistoryItem, SearchMode, WordResult
from word_finder.utils.logging_config import configure_logging
from word_finder.utils.observability import get_logger
from word_finder.utils.telemetry import StructuredTelemetry, TelemetryLogger

from word_finder.app.data.history import HistoryStore
from word_finder.app.data.storage import KeyValueStorage, SQLiteKeyValueStorage
from word_finder.app.services.generator import (
    DEFAULT_MODEL,
    OpenAIWordGenerator,
    WordGenerator,
)
from word_finder.app.services.search_service import WordSearchService
from word_finder.app.ui.gradio import create_interface

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings read from ``WORD_FINDER_*`` environment variables."""

    db_path: str = "word_finder.db"
    model: str = DEFAULT_MODEL
    share: bool = False
    server_name: str = "0.0.0.0"
    server_port: int = 7860

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        port_value = env.get("WORD_FINDER_PORT", "")
        try:
            port = int(port_value) if port_value.strip() else cls.server_port
        except ValueError:
            port = cls.server_port
        return cls(
            db_path=env.get("WORD_FINDER_DB_PATH") or cls.db_path,
            model=env.get("WORD_FINDER_MODEL") or cls.model,
            share=str(env.get("WORD_FINDER_SHARE", "")).strip().lower() in _TRUTHY,
            server_port=port,
        )


class WordFinderApp:
    """High-level application facade bundling dependencies."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        storage: Optional[KeyValueStorage] = None,
        generator: Optional[WordGenerator] = None,
        history_store: Optional[HistoryStore] = None,
        search_service: Optional[WordSearchService] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")
        self._logger.info(
            "Initialising application facade",
            context={"db_path": self.config.db_path, "model": self.config.model},
        )

        if storage is None:
            sqlite_storage = SQLiteKeyValueStorage(self.config.db_path)
            try:
                sqlite_storage.ensure_database()
            except Exception as exc:
                self._logger.error(
                    "Storage initialisation failed",
                    context={"db_path": self.config.db_path, "error": str(exc)},
                )
                raise
            storage = sqlite_storage
        self.storage = storage

        self.history_store = history_store or HistoryStore(self.storage)
        self.history_store.load()

        if telemetry is None:
            telemetry = StructuredTelemetry(listeners=[TelemetryLogger()])

        if search_service is None:
            search_service = WordSearchService(
                generator=generator or OpenAIWordGenerator(model=self.config.model),
                history_store=self.history_store,
                telemetry=telemetry,
            )
        self.search_service = search_service

        self._logger.info(
            "Application dependencies wired",
            context={"history_items": len(self.history_store.items())},
        )

    # Public API ------------------------------------------------------------
    def search(self, text: str, mode: SearchMode | str) -> List[WordResult]:
        return self.search_service.search(text, mode)

    def load_more(
        self,
        text: str,
        mode: SearchMode | str,
        already_shown: List[str],
    ) -> List[WordResult]:
        return self.search_service.load_more(text, mode, already_shown)

    def get_history(self) -> List[HistoryItem]:
        return self.search_service.get_history()

    def record_history(self, text: str, mode: SearchMode | str) -> HistoryItem:
        return self.search_service.record_history(text, mode)

    def remove_history(self, item_id: str) -> bool:
        return self.search_service.remove_history(item_id)

    def create_gradio_interface(self):
        return create_interface(self.search_service)


def main() -> None:
    configure_logging()
    app = WordFinderApp()
    interface = app.create_gradio_interface()
    interface.queue()
    interface.launch(
        server_name=app.config.server_name,
        server_port=app.config.server_port,
        share=app.config.share,
    )


if __name__ == "__main__":
    main()


__all__ = ["AppConfig", "WordFinderApp", "main"]
