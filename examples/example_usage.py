"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the registry, gate and resolver.
"""

import time

from src.training_attendance.training_attendance.common.validators import parse_location
from src.training_attendance.training_attendance.container import build_container
from src.training_attendance.training_attendance.joining.memory_event_directory import InMemoryEventDirectory
from src.training_attendance.training_attendance.joining.model import Trainee
from src.training_attendance.training_attendance.roster.sync import RosterSync


def main():
    events = InMemoryEventDirectory()
    events.register_event("FLOOD-2025", {"id": "evt-1", "title": "Flood rescue drill"})
    container = build_container(storage_backend="memory", event_client=events)

    session = container.session_registry.create_session(
        "training-42",
        "gps",
        30,
        {"latitude": 22.0797, "longitude": 82.1391},
        trainer_id="trainer-1",
    )
    print("Session code:", session.token)

    sync = RosterSync(
        container.session_registry,
        session.token,
        lambda records: print("Roster:", [r.trainee_name for r in records]),
        interval=0.2,
    )
    sync.start()

    here = parse_location({"type": "Point", "coordinates": [82.1391, 22.0798]})
    resolver = container.code_resolver
    print(resolver.resolve("flood-2025", Trainee("t-1", name="Asha")))
    print(resolver.resolve(session.token, Trainee("t-2", name="Ravi"), location=here))
    print(resolver.resolve(session.token, Trainee("t-2", name="Ravi"), location=here))

    time.sleep(0.5)
    print(container.session_registry.end_session(session.token))
    time.sleep(0.5)
    sync.stop(wait=True)


if __name__ == "__main__":
    main()
