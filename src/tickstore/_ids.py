"""Identity generator for entities and store revisions."""

import uuid


def new_id() -> str:
    return str(uuid.uuid4())
