import uuid


def new_object_id() -> str:
    """Return a fresh 32-character hex identifier for documents and embedded entries."""
    return uuid.uuid4().hex
