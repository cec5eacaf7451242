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


"""Incident-specific data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests
from requests.cookies import RequestsCookieJar

from shared.http_client import TransportConfig

from .constants import Severity


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    def to_payload(self) -> dict[str, str]:
        return {"user": self.username, "password": self.password}


@dataclass(frozen=True)
class Label:
    type: str
    value: str


@dataclass(frozen=True)
class Settings:
    """Typed view of the inbound ``configuration`` block."""
    base_url: str
    credentials: Credentials
    name: str = ""
    details: str = ""
    severity: str = ""
    labels: str = ""
    occured: str = ""
    investigate: bool = False
    transport: TransportConfig = field(default_factory=TransportConfig)


@dataclass
class Incident:
    """Canonical incident record sent to ``/incident``.

    The server-reserved fields (status .. insights) are sent zeroed on
    creation.
    """
    name: str
    details: str
    severity: Severity
    created: str
    occured: str
    create_investigation: bool
    labels: list[Label] = field(default_factory=list)
    status: int = 0
    owner: str = ""
    id: str = ""
    version: int = 0
    type: str = ""
    artifacts: list[Any] = field(default_factory=list)
    tasks: list[Any] = field(default_factory=list)
    evidence: list[Any] = field(default_factory=list)
    insights: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "details": self.details,
            "severity": int(self.severity),
            "created": self.created,
            "occured": self.occured,
            "createInvestigation": self.create_investigation,
            "labels": [{"type": lbl.type, "value": lbl.value} for lbl in self.labels],
            "status": self.status,
            "owner": self.owner,
            "id": self.id,
            "version": self.version,
            "type": self.type,
            "artifacts": list(self.artifacts),
            "tasks": list(self.tasks),
            "evidence": list(self.evidence),
            "insights": self.insights,
        }


@dataclass(frozen=True)
class Session:
    """An authenticated session: the client holding the cookie jar plus the
    XSRF token harvested before login.

    Only ``establish`` creates one, and only after the login returned 200.
    """
    client: requests.Session
    base_url: str
    xsrf_token: str
    transport: TransportConfig

    @property
    def cookies(self) -> RequestsCookieJar:
        return self.client.cookies
