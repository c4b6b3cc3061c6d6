# messenger/domain/addressing.py
"""Resolution of the raw ``recipient_id``/``group_id`` pair into a destination.

A message goes to exactly one place. Callers hand in the two optional ids as
they arrive on the wire and get back a :data:`Destination` variant; every
other combination is rejected before anything touches storage.
"""

from messenger.domain.entities import (
    Attachment,
    Destination,
    DirectDestination,
    GroupDestination,
)
from messenger.domain.exceptions import InvalidAddressingError, ValidationError


def resolve_destination(recipient_id: int | None, group_id: int | None) -> Destination:
    if recipient_id is not None and group_id is not None:
        raise InvalidAddressingError("Message cannot have both a recipient and a group")
    if recipient_id is not None:
        return DirectDestination(peer_id=recipient_id)
    if group_id is not None:
        return GroupDestination(group_id=group_id)
    raise InvalidAddressingError("Message must have either a recipient or a group")


def destination_columns(destination: Destination) -> dict[str, int | None]:
    """Flatten a destination into the ``recipient_id``/``group_id`` columns."""
    if isinstance(destination, DirectDestination):
        return {"recipient_id": destination.peer_id, "group_id": None}
    if isinstance(destination, GroupDestination):
        return {"recipient_id": None, "group_id": destination.group_id}
    raise InvalidAddressingError(f"Unknown destination {destination!r}")


def resolve_attachment(
    file_url: str | None, file_name: str | None, file_type: str | None
) -> Attachment | None:
    fields = (file_url, file_name, file_type)
    if all(field is None for field in fields):
        return None
    if any(not field for field in fields):
        raise ValidationError(
            "Attachment requires file_url, file_name and file_type together"
        )
    return Attachment(file_url=file_url, file_name=file_name, file_type=file_type)
