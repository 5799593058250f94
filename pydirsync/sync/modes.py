"""Sync policies for one-way directory synchronization."""

from enum import Enum


class SyncPolicy(str, Enum):
    """Policy deciding when an existing destination file is overwritten."""

    FULL = "full"
    """Always overwrite destination files"""

    DIFFERENTIAL = "differential"
    """Overwrite only when the file contents differ"""

    @classmethod
    def from_string(cls, value: str) -> "SyncPolicy":
        """Parse a sync policy from its name or abbreviation.

        Args:
            value: Policy name ("full", "differential") or the abbreviation
                "diff"; matching is case-insensitive

        Returns:
            SyncPolicy enum value

        Raises:
            ValueError: If the value is not a known policy

        Examples:
            >>> SyncPolicy.from_string("Differential")
            <SyncPolicy.DIFFERENTIAL: 'differential'>
            >>> SyncPolicy.from_string("diff")
            <SyncPolicy.DIFFERENTIAL: 'differential'>
        """
        normalized = value.strip().lower()
        for policy in cls:
            if normalized == policy.value:
                return policy

        if normalized == "diff":
            return cls.DIFFERENTIAL

        valid = ", ".join(p.value for p in cls)
        raise ValueError(f"Invalid sync policy: {value}. Valid policies: {valid}")

    @property
    def compares_content(self) -> bool:
        """Whether existing destination files are hashed before copying."""
        return self == SyncPolicy.DIFFERENTIAL
