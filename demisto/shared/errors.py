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


"""Error taxonomy for talking to the case-management service.

Every fatal condition raised by the library derives from ``DemistoError``;
only the CLI turns them into exit codes.
"""

from __future__ import annotations


class DemistoError(Exception):
    """Base class for fatal adapter errors."""


class ConfigurationError(DemistoError):
    """Settings are malformed or unusable; no network call was attempted."""


class TransportError(DemistoError):
    """DNS, connection, timeout or TLS failure below the HTTP layer."""


class AuthenticationError(DemistoError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DeliveryError(DemistoError):
    def __init__(self, message: str, status_code: int, status: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status = status
