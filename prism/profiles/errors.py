"""
Risk Profile Store errors.
"""

from __future__ import annotations


class ProfileStoreError(Exception):
    """Base class for profile store failures."""


class ProfileConfigurationError(ProfileStoreError):
    """The stored profiles are inconsistent or unreadable."""


class MultipleDefaultProfilesError(ProfileConfigurationError):
    """More than one stored profile is flagged ``is_default``."""

    def __init__(self, profiles: list[str]) -> None:
        self.profiles = profiles
        super().__init__(
            f"Multiple risk profiles marked as default: {', '.join(profiles)}. "
            "Only one profile may have is_default: true"
        )


class ProfileNotFoundError(ProfileStoreError):
    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__(f"Risk profile not found: {profile_id}")


class InvalidProfileIdError(ProfileStoreError):
    def __init__(self, raw_id: str) -> None:
        self.raw_id = raw_id
        super().__init__(f"Invalid risk profile id: {raw_id!r}")


class SystemProfileError(ProfileStoreError):
    """System-provided profiles cannot be deleted."""

    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__(f"Cannot delete system profile: {profile_id}")
