from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from guardiao.config import (
    DEFAULT_ALERTS_PATH, DEFAULT_EVIDENCE_PATH, DEFAULT_TERRITORIES_PATH,
    SETTINGS_ALERTS_KEY, SETTINGS_EVIDENCE_KEY, SETTINGS_LOG_FILE_KEY, SETTINGS_TERRITORIES_KEY,
)

ORG_ID = "guardiao"
APP_ID = "field-survey"
ORG_DOMAIN = "guardiao.app"

VISIBLE_APP_NAME = "Guardião"


@dataclass(frozen=True)
class DataSources:
    """Where each survey document is read from (a path or an http(s) URL)."""
    territories: str = DEFAULT_TERRITORIES_PATH
    alerts: str = DEFAULT_ALERTS_PATH
    evidence: str = DEFAULT_EVIDENCE_PATH


def resolve_data_sources(settings: QSettings | None = None) -> DataSources:
    """Bundled documents unless overridden in the application settings."""
    settings = settings if settings is not None else QSettings()
    return DataSources(
        territories=settings.value(SETTINGS_TERRITORIES_KEY, DEFAULT_TERRITORIES_PATH, type=str),
        alerts=settings.value(SETTINGS_ALERTS_KEY, DEFAULT_ALERTS_PATH, type=str),
        evidence=settings.value(SETTINGS_EVIDENCE_KEY, DEFAULT_EVIDENCE_PATH, type=str),
    )


def resolve_log_file(settings: QSettings | None = None) -> str | None:
    """Log file path from the application settings, if one is configured."""
    settings = settings if settings is not None else QSettings()
    return settings.value(SETTINGS_LOG_FILE_KEY, "", type=str) or None


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    return app
