"""
Result models - Records returned by the remote search service.

The service issues no stable identifiers, so results are identified by
their position in the ResultSet they arrived in.
"""

from dataclasses import dataclass
from typing import Optional

REQUIRED_FIELDS = ("group_name", "jar_name", "version")


@dataclass(frozen=True)
class Result:
    """A single artifact returned by the search service."""
    group_name: str
    jar_name: str
    version: str
    description: str = ""

    @classmethod
    def from_json(cls, record: dict) -> Optional["Result"]:
        """
        Build a Result from one decoded JSON record.

        Returns:
            Result, or None if the record lacks a required string field
        """
        if not isinstance(record, dict):
            return None
        for key in REQUIRED_FIELDS:
            if not isinstance(record.get(key), str):
                return None
        return cls(
            group_name=record["group_name"],
            jar_name=record["jar_name"],
            version=record["version"],
            description=record.get("description") or "",
        )

    @property
    def project(self) -> str:
        """Display name: `ring` for ring/ring, `org.clojure/data.json` otherwise."""
        if self.group_name == self.jar_name:
            return self.group_name
        return f"{self.group_name}/{self.jar_name}"

    @property
    def uri(self) -> str:
        """Destination path of the documentation page."""
        return f"/d/{self.group_name}/{self.jar_name}/{self.version}"


# Produced atomically by one fetch, never merged
ResultSet = tuple[Result, ...]
