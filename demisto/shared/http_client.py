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


"""Thin HTTP transport wrapper – builds the ``requests`` client used for a
single invocation and funnels every request through one place so TLS
verification, timeouts and transport failures are handled uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests
import urllib3
from requests.adapters import BaseAdapter
from urllib3.exceptions import InsecureRequestWarning

from .common import vprint
from .errors import TransportError

XSRF_HEADER = "X-XSRF-TOKEN"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportConfig:
    """How the client talks to the remote endpoint.

    ``verify_tls`` defaults to ``False``: the service is usually an on-prem
    appliance with a self-signed certificate. ``adapter`` replaces the
    default ``requests`` transport for both schemes when set.
    """
    verify_tls: bool = False
    timeout: float = DEFAULT_TIMEOUT
    adapter: BaseAdapter | None = None


def new_client(config: TransportConfig) -> requests.Session:
    """Return a fresh ``requests.Session`` (cookie jar included) for *config*."""
    client = requests.Session()
    client.verify = config.verify_tls
    if config.adapter is not None:
        client.mount("https://", config.adapter)
        client.mount("http://", config.adapter)

    if not config.verify_tls:
        urllib3.disable_warnings(InsecureRequestWarning)
        vprint("TLS certificate verification is disabled for this session")

    return client


def json_headers(xsrf_token: str) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Content-type": "application/json",
        XSRF_HEADER: xsrf_token,
    }


def send(
    client: requests.Session,
    method: str,
    url: str,
    config: TransportConfig,
    **kwargs: Any,
) -> requests.Response:
    """Issue one request and raise ``TransportError`` on any transport failure.

    ``verify`` is passed explicitly so that a disabled check stays disabled;
    ``REQUESTS_CA_BUNDLE`` would otherwise replace ``client.verify``. With
    verification on, requests may still swap ``True`` for that bundle path.
    """
    vprint(f"{method} {url}")
    try:
        return client.request(
            method,
            url,
            verify=config.verify_tls,
            timeout=config.timeout,
            **kwargs,
        )
    except requests.RequestException as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc
