#!/usr/bin/env python3
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


"""
Deliver an alert to the case-management service as a new incident.

The script reads a JSON envelope from stdin (or ``--file``), normalizes its
``configuration`` block into an incident record, logs in to the service and
creates the incident with a single authenticated write.

Input envelope
--------------
{"configuration": {"base_url": "https://demisto.local", "username": "...",
                   "password": "...", "name": "...", "details": "...",
                   "severity": "High", "labels": "src:ids,host:web-01",
                   "occured": "1700000000.123", "investigate": "1"}}

Optional keys: ``verify_tls`` ("1" to verify the server certificate; off by
default for self-signed appliances) and ``timeout`` (seconds, default 30).

Exit codes
----------
0  incident delivered
1  unsupported execution mode (``--execute`` missing)
2  input could not be read
3  configuration, transport, authentication or delivery failure

Usage examples
--------------
# Deliver
cat alert.json | python3 -m incident.send_incident --execute

# Dry-run (print the incident payload without contacting the service)
python3 -m incident.send_incident --execute --file alert.json --dry-run
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import NoReturn

from shared.common import parse_runner_debug, set_verbose_enabled, vprint
from shared.errors import DemistoError

from incident.utils.constants import ExitCode
from incident.utils.normalizer import build_incident, load_envelope, load_settings
from incident.utils.session import establish
from incident.utils.submitter import submit


def deliver(text: str, *, verify_tls: bool | None = None, dry_run: bool = False) -> None:
    """Normalize the envelope in *text* and deliver the resulting incident."""
    settings = load_settings(load_envelope(text), verify_tls=verify_tls)
    incident = build_incident(settings)

    if dry_run:
        print(json.dumps(incident.to_payload(), indent=2))
        return

    session = establish(settings.base_url, settings.credentials, settings.transport)
    print(f"Logged in to {settings.base_url} as {settings.credentials.username}")

    submit(session, incident)
    print(f"Incident {incident.name!r} delivered to {settings.base_url}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an incident on the case-management service from a JSON alert envelope.",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Execution mode; required for the script to do anything.",
    )
    parser.add_argument(
        "--file",
        "-f",
        default=None,
        help="Read the envelope from this file instead of stdin.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the incident JSON instead of sending it.",
    )
    parser.add_argument(
        "--verify-tls",
        action="store_true",
        default=None,
        help="Verify the server TLS certificate (overrides the verify_tls setting).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logs (also enabled when RUNNER_DEBUG=1)",
    )
    return parser.parse_args(argv)


def _read_input(path: str | None) -> str:
    if path:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    return sys.stdin.buffer.read().decode("utf-8")


def _fail(exc: DemistoError) -> NoReturn:
    print(f"ERROR: {type(exc).__name__}: {exc}", file=sys.stderr)
    raise SystemExit(int(ExitCode.FAILED))


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    if not args.execute:
        print("ERROR: Unsupported execution mode", file=sys.stderr)
        raise SystemExit(int(ExitCode.UNSUPPORTED_MODE))

    try:
        set_verbose_enabled(bool(args.verbose) or parse_runner_debug())
    except DemistoError as exc:
        _fail(exc)

    try:
        text = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: failed to read input: {exc}", file=sys.stderr)
        raise SystemExit(int(ExitCode.INPUT_UNREADABLE))
    vprint(f"Read {len(text)} characters of input")

    try:
        deliver(text, verify_tls=args.verify_tls, dry_run=bool(args.dry_run))
    except DemistoError as exc:
        _fail(exc)

    raise SystemExit(int(ExitCode.OK))


if __name__ == "__main__":
    main()
