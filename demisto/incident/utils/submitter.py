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


"""Incident delivery – a single authenticated ``POST /incident``."""

from __future__ import annotations

from shared.common import vprint
from shared.errors import DeliveryError
from shared.http_client import json_headers, send

from .constants import INCIDENT_PATH
from .models import Incident, Session


def submit(session: Session, incident: Incident) -> None:
    """POST *incident* using *session* and raise ``DeliveryError`` unless 200.

    The response body (including the id the service assigns) is not read.
    """
    resp = send(
        session.client,
        "POST",
        session.base_url + INCIDENT_PATH,
        session.transport,
        json=incident.to_payload(),
        headers=json_headers(session.xsrf_token),
    )
    if resp.status_code != 200:
        status = f"{resp.status_code} {resp.reason or ''}".strip()
        raise DeliveryError(f"Response {status}", status_code=resp.status_code, status=status)

    vprint(f"Incident {incident.name!r} accepted by {session.base_url}")
