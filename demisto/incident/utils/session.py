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


"""Session establishment – harvest the XSRF token from the service root and
exchange credentials for an authenticated session cookie.
"""

from __future__ import annotations

import requests

from shared.common import vprint
from shared.errors import AuthenticationError
from shared.http_client import TransportConfig, json_headers, new_client, send

from .constants import LOGIN_PATH, XSRF_COOKIE
from .models import Credentials, Session
from .normalizer import validate_base_url


def extract_xsrf_token(response: requests.Response) -> str:
    """Return the ``XSRF-TOKEN`` cookie set by *response*, or ``""``.

    When the cookie is set more than once the last value wins.
    """
    token = ""
    for cookie in response.cookies:
        if cookie.name == XSRF_COOKIE:
            token = cookie.value or ""
    return token


def establish(
    base_url: str,
    credentials: Credentials,
    transport: TransportConfig | None = None,
) -> Session:
    """Log in to the service at *base_url* and return the resulting ``Session``.

    A missing token is not an error here: the login is still attempted so
    the server reports the real cause.
    """
    base_url = validate_base_url(base_url)
    transport = transport or TransportConfig()
    client = new_client(transport)

    root = send(client, "GET", base_url, transport)
    xsrf_token = extract_xsrf_token(root)
    if not xsrf_token:
        # TODO: fail early once it is confirmed no deployment logs in without an XSRF cookie.
        vprint(f"No {XSRF_COOKIE} cookie returned by {base_url}; attempting login without it")

    resp = send(
        client,
        "POST",
        base_url + LOGIN_PATH,
        transport,
        json=credentials.to_payload(),
        headers=json_headers(xsrf_token),
    )
    if resp.status_code != 200:
        raise AuthenticationError(f"Bad login response: {resp.status_code}", status_code=resp.status_code)

    vprint(f"Authenticated as {credentials.username} ({len(client.cookies)} cookie(s) held)")
    return Session(client=client, base_url=base_url, xsrf_token=xsrf_token, transport=transport)
