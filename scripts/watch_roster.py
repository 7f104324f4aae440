"""Trainer console: follow a session's roster until it ends or Ctrl+C.

    python scripts/watch_roster.py http://localhost:5000 <session_token>
"""
from __future__ import annotations

import argparse
import sys
import threading
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.training_attendance.training_attendance.core.constants import DEFAULT_ROSTER_POLL_SECONDS
from src.training_attendance.training_attendance.roster.api_client import AttendanceApiClient
from src.training_attendance.training_attendance.roster.sync import RosterSync


def render(records) -> None:
    print(f"\n{len(records)} attendee(s)")
    for r in records:
        print(f"  {r.marked_at:%H:%M:%S}  {r.trainee_name or r.trainee_id}  ({r.method.value})")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("base_url")
    parser.add_argument("token")
    parser.add_argument("--interval", type=float, default=DEFAULT_ROSTER_POLL_SECONDS)
    parser.add_argument("--access-token", default=None)
    args = parser.parse_args()

    finished = threading.Event()
    client = AttendanceApiClient(args.base_url, access_token=args.access_token)
    sync = RosterSync(
        client,
        args.token,
        render,
        interval=args.interval,
        on_ended=lambda status: finished.set(),
    )
    sync.start()
    if sync.closed:
        finished.set()

    try:
        while not finished.wait(0.5):
            if not sync.running:
                break
    except KeyboardInterrupt:
        pass
    finally:
        sync.stop(wait=True)
        print("Roster view closed")


if __name__ == "__main__":
    main()
