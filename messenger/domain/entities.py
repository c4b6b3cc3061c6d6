# messenger/domain/entities.py
from dataclasses import dataclass

DELETED_MESSAGE_PLACEHOLDER = "This message was deleted"


@dataclass(frozen=True)
class DirectDestination:
    peer_id: int


@dataclass(frozen=True)
class GroupDestination:
    group_id: int


Destination = DirectDestination | GroupDestination


@dataclass(frozen=True)
class Attachment:
    file_url: str
    file_name: str
    file_type: str
