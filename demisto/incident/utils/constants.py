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


"""Domain constants – remote endpoints, cookie names, severity levels and
process exit codes.
"""

from __future__ import annotations

from enum import IntEnum


XSRF_COOKIE = "XSRF-TOKEN"
LOGIN_PATH = "/login"
INCIDENT_PATH = "/incident"


class Severity(IntEnum):
    """Incident severity levels as numbered by the case-management service."""
    UNKNOWN = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


# Configuration vocabulary -> level. Matching is exact.
SEVERITY_LABELS: dict[str, Severity] = {
    "Unknown": Severity.UNKNOWN,
    "Low": Severity.LOW,
    "Medium": Severity.MEDIUM,
    "High": Severity.HIGH,
    "Critical": Severity.CRITICAL,
}


class ExitCode(IntEnum):
    OK = 0
    UNSUPPORTED_MODE = 1
    INPUT_UNREADABLE = 2
    FAILED = 3
