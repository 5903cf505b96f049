from dataclasses import dataclass


@dataclass(frozen=True)
class IncidentHandle:
    """
    Value Object identifying an incident opened on the provider.

    id is assigned by the provider; key is the deduplication key sent with
    the trigger request.
    """
    id: str
    key: str

    def __str__(self):
        return f"{self.id} ({self.key})"
