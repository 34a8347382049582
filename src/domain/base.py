import uuid
from datetime import UTC, datetime


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> int:
    return int(datetime.now(UTC).timestamp())
