"""
Input Manager (GeoJSON / JSON)
Reads the survey documents from a local file or an http(s) URL.
"""
import json
import logging
import os
from typing import Any, Callable, TypeVar
from urllib.parse import urlparse

import requests

from guardiao.config import HTTP_TIMEOUT_SECONDS
from guardiao.model.evidence import AlertEvidence
from guardiao.model.features import Alert, LoadFailure, Territory, load_alerts, load_territories

# Get module logger
logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


class IOManager:
    """Whole-document reads; every failure surfaces as LoadFailure."""

    @staticmethod
    def read_document(source: str) -> Any:
        """
        Fetch and parse one JSON document.

        Raises:
            LoadFailure: Missing file, unreachable URL, non-success status
                or invalid JSON.
        """
        logger.info(f"Reading document from: {source}")
        if is_url(source):
            text = IOManager._fetch_text(source)
        else:
            text = IOManager._read_text(source)

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in '{source}': {e}")
            raise LoadFailure(f"Could not parse data: {e.msg} at line {e.lineno}", source) from e

    @staticmethod
    def load_territories(source: str) -> list[Territory]:
        data = IOManager._read_collection(source, "territories")
        territories = IOManager._build(load_territories, data, source, "territories")
        logger.info(f"Loaded {len(territories)} territories from: {source}")
        return territories

    @staticmethod
    def load_alerts(source: str) -> list[Alert]:
        data = IOManager._read_collection(source, "alerts")
        alerts = IOManager._build(load_alerts, data, source, "alerts")
        logger.info(f"Loaded {len(alerts)} alerts from: {source}")
        return alerts

    @staticmethod
    def load_evidence(source: str) -> AlertEvidence:
        """
        Load the evidence record and resolve its image paths against the
        document's directory. URL sources keep their paths as given.
        """
        data = IOManager.read_document(source)
        if not isinstance(data, dict):
            raise LoadFailure("Evidence document must be a JSON object.", source)
        evidence = IOManager._build(AlertEvidence.from_dict, data, source, "evidence")
        if is_url(source):
            return evidence
        return evidence.resolve(os.path.dirname(os.path.abspath(source)))

    # ---- helpers ----

    @staticmethod
    def _build(mapper: Callable[[Any], T], data: Any, source: str, label: str) -> T:
        """Run a payload mapper; malformed values surface as LoadFailure."""
        try:
            return mapper(data)
        except LoadFailure as e:
            raise LoadFailure(f"Failed to load {label} data: {e.message}", source) from e
        except (ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.error(f"Malformed {label} data in '{source}': {e}")
            raise LoadFailure(f"Failed to load {label} data: {e}", source) from e

    @staticmethod
    def _read_collection(source: str, label: str) -> Any:
        try:
            data = IOManager.read_document(source)
        except LoadFailure as e:
            raise LoadFailure(f"Failed to load {label} data: {e.message}", source) from e
        if not isinstance(data, (dict, list)):
            raise LoadFailure(f"Failed to load {label} data: not a FeatureCollection", source)
        return data

    @staticmethod
    def _read_text(path: str) -> str:
        if not os.path.exists(path):
            logger.error(f"Data file not found: {path}")
            raise LoadFailure("Data file not found", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read '{path}': {e}")
            raise LoadFailure(f"Could not read file: {e}", path) from e

    @staticmethod
    def _fetch_text(url: str) -> str:
        try:
            response = requests.get(url, timeout=HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            logger.error(f"Request to '{url}' failed: {e}")
            raise LoadFailure(f"Network error: {e}", url) from e

        if not response.ok:
            logger.error(f"Request to '{url}' returned HTTP {response.status_code}")
            raise LoadFailure(f"Server responded with HTTP {response.status_code}", url)
        return response.text
