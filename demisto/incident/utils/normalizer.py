#
# Copyright 2026 ABSA Group Limited
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#


"""Payload normalizer – turns the inbound JSON envelope into typed
``Settings`` and assembles the canonical ``Incident`` record.

Input envelope shape::

    {"configuration": {"base_url": "...", "username": "...", ...}}

All configuration values are strings. Display-field problems are never
fatal: unknown severities become ``Unknown``, malformed label tokens are
dropped and an unparseable ``occured`` epoch falls back to the current time
with a warning.
"""

from __future__ import annotations

import json
import re
import sys
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from shared.common import iso_utc, utc_now
from shared.errors import ConfigurationError
from shared.http_client import DEFAULT_TIMEOUT, TransportConfig

from .constants import SEVERITY_LABELS, Severity
from .models import Credentials, Incident, Label, Settings

EPOCH_RE = re.compile(r"[+-]?\d+")


# ---------------------------------------------------------------------------
# Envelope / settings
# ---------------------------------------------------------------------------

def load_envelope(text: str) -> dict[str, Any]:
    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"input is not valid JSON: {exc}") from exc
    if not isinstance(envelope, dict):
        raise ConfigurationError("input must be a JSON object")
    return envelope


def _configuration_block(envelope: dict[str, Any]) -> dict[str, str]:
    raw = envelope.get("configuration")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError("'configuration' must be a JSON object")

    for key, value in raw.items():
        if not isinstance(value, str):
            raise ConfigurationError(
                f"configuration value for {key!r} must be a string, got {type(value).__name__}"
            )
    return raw


def validate_base_url(raw: str) -> str:
    """Return *raw* without a trailing slash, or raise ``ConfigurationError``."""
    url = (raw or "").strip()
    if not url:
        raise ConfigurationError("base_url is required")
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
        parsed = parse_url(url)
    except (ValueError, LocationParseError) as exc:
        raise ConfigurationError(f"malformed base_url {raw!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc or not parsed.host:
        raise ConfigurationError(f"base_url must be an absolute http(s) URL, got {raw!r}")
    if any(ch.isspace() for ch in parts.netloc):
        raise ConfigurationError(f"base_url host must not contain whitespace, got {raw!r}")
    return url.rstrip("/")


def _parse_timeout(raw: str | None) -> float:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"timeout must be a number of seconds, got {raw!r}") from exc
    if not timeout > 0:
        raise ConfigurationError(f"timeout must be positive, got {raw!r}")
    return timeout


def load_settings(envelope: dict[str, Any], *, verify_tls: bool | None = None) -> Settings:
    """Build ``Settings`` from the envelope.

    *verify_tls* overrides the ``verify_tls`` key when not ``None``.
    """
    cfg = _configuration_block(envelope)

    if verify_tls is None:
        verify_tls = cfg.get("verify_tls") == "1"

    return Settings(
        base_url=validate_base_url(cfg.get("base_url", "")),
        credentials=Credentials(cfg.get("username", ""), cfg.get("password", "")),
        name=cfg.get("name", ""),
        details=cfg.get("details", ""),
        severity=cfg.get("severity", ""),
        labels=cfg.get("labels", ""),
        occured=cfg.get("occured", ""),
        investigate=cfg.get("investigate") == "1",
        transport=TransportConfig(
            verify_tls=verify_tls,
            timeout=_parse_timeout(cfg.get("timeout")),
        ),
    )


# ---------------------------------------------------------------------------
# Display fields
# ---------------------------------------------------------------------------

def parse_severity(value: str | None) -> Severity:
    return SEVERITY_LABELS.get(value or "", Severity.UNKNOWN)


def parse_labels(value: str | None) -> list[Label]:
    """Parse a comma-separated ``type:value`` string into labels.

    Tokens without exactly one ``:`` are dropped.

    Example input:  ``"src:ids,host:web-01"``
    """
    labels: list[Label] = []
    for token in (value or "").split(","):
        token = token.strip()
        if token.count(":") != 1:
            continue
        label_type, label_value = token.split(":", 1)
        labels.append(Label(type=label_type, value=label_value))
    return labels


def parse_occured(value: str | None, now: datetime) -> str:
    """Convert an epoch-seconds string to ISO-8601 UTC.

    Anything after the first ``.`` is discarded. Returns *now* (and warns on
    stderr) when the value cannot be used.
    """
    head = (value or "").split(".", 1)[0]
    if EPOCH_RE.fullmatch(head):
        try:
            return iso_utc(datetime.fromtimestamp(int(head), tz=timezone.utc))
        except (OverflowError, OSError, ValueError):
            pass
    print(f"WARN: Illegal occured epoch time {value}", file=sys.stderr)
    return iso_utc(now)


def build_incident(settings: Settings, now: datetime | None = None) -> Incident:
    now = now or utc_now()
    return Incident(
        name=settings.name,
        details=settings.details,
        severity=parse_severity(settings.severity),
        created=iso_utc(now),
        occured=parse_occured(settings.occured, now),
        create_investigation=settings.investigate,
        labels=parse_labels(settings.labels),
    )
