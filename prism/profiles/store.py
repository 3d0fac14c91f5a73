"""
Risk Profile Store — YAML-file backed profile configuration.

Each profile lives in ``<profiles_dir>/<profile-id>.yaml``. At most one profile
may be the default; zero defaults is tolerated (no filtering is applied), more
than one is reported as MultipleDefaultProfilesError rather than resolved.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prism.config import settings
from prism.models.profile_models import DefaultProfileEntry, ProfileValidation, RiskProfile
from prism.profiles.errors import (
    InvalidProfileIdError,
    MultipleDefaultProfilesError,
    ProfileConfigurationError,
    ProfileNotFoundError,
    SystemProfileError,
)

logger = logging.getLogger("prism.profiles")

PROFILE_SUFFIXES = (".yaml", ".yml")
SYSTEM_AUTHOR = "system"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9-]+")
_DASH_RUN = re.compile(r"-+")

_LOAD_ERRORS = (OSError, yaml.YAMLError, ValidationError, ProfileConfigurationError)


def sanitize_profile_id(raw_id: str) -> str:
    """Reduce an id to ``[A-Za-z0-9-]``, collapsing and trimming dashes."""
    safe = _DASH_RUN.sub("-", _UNSAFE_ID_CHARS.sub("-", raw_id or "")).strip("-")
    if not safe:
        raise InvalidProfileIdError(raw_id)
    return safe


def find_single_default(profiles: Iterable[RiskProfile]) -> RiskProfile | None:
    """
    The one default profile, or None when no profile is flagged.

    Raises:
        MultipleDefaultProfilesError: more than one profile is flagged.
    """
    defaults = [p for p in profiles if p.is_default]
    if len(defaults) > 1:
        raise MultipleDefaultProfilesError([f"{p.name or p.id} ({p.id})" for p in defaults])
    return defaults[0] if defaults else None


def _dump_yaml(data: dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


class ProfileStore:
    """Loads, validates and persists risk profiles in a directory."""

    def __init__(self, profiles_dir: str | Path | None = None) -> None:
        self.profiles_dir = Path(profiles_dir or settings.profiles_dir)

    # ── Reading ──

    def _profile_files(self) -> list[Path]:
        if not self.profiles_dir.is_dir():
            return []
        return sorted(
            p for p in self.profiles_dir.iterdir() if p.is_file() and p.suffix in PROFILE_SUFFIXES
        )

    def _path_for(self, profile_id: str) -> Path | None:
        safe_id = sanitize_profile_id(profile_id)
        for suffix in PROFILE_SUFFIXES:
            path = self.profiles_dir / f"{safe_id}{suffix}"
            if path.is_file():
                return path
        return None

    @staticmethod
    def _read_raw(path: Path) -> dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ProfileConfigurationError(f"{path.name} does not contain a YAML mapping")
        return data

    def _load_path(self, path: Path) -> RiskProfile:
        return RiskProfile.from_yaml_dict(path.stem, self._read_raw(path))

    def list_profiles(self) -> list[RiskProfile]:
        """All readable profiles, default first, then by name."""
        profiles: list[RiskProfile] = []
        for path in self._profile_files():
            try:
                profiles.append(self._load_path(path))
            except _LOAD_ERRORS as e:
                logger.error(f"Failed to load risk profile {path.name}: {e}")
        return sorted(profiles, key=lambda p: (not p.is_default, p.name.lower()))

    def load(self, profile_id: str) -> RiskProfile | None:
        """Load one profile by id; None if it does not exist or cannot be read."""
        try:
            path = self._path_for(profile_id)
        except InvalidProfileIdError:
            logger.warning(f"Rejected risk profile id {profile_id!r}")
            return None
        if path is None:
            logger.warning(f"Risk profile not found: {profile_id}")
            return None
        try:
            profile = self._load_path(path)
        except _LOAD_ERRORS as e:
            logger.error(f"Failed to load risk profile {path.name}: {e}")
            return None
        logger.info(f"Loaded risk profile: {profile.name}")
        return profile

    def load_default(self) -> RiskProfile | None:
        """
        Load the single default profile.

        Returns None when no profile is flagged default.

        Raises:
            MultipleDefaultProfilesError: more than one profile is flagged.
        """
        try:
            profile = find_single_default(self.list_profiles())
        except MultipleDefaultProfilesError as e:
            logger.error(f"CONFIGURATION ERROR: {e}")
            raise
        if profile is None:
            logger.warning("No risk profile marked as default (is_default: true)")
            return None
        logger.info(f"Loaded default risk profile: {profile.name}")
        return profile

    def export(self, profile_id: str) -> str:
        """Raw YAML text of a profile."""
        path = self._path_for(profile_id)
        if path is None:
            raise ProfileNotFoundError(profile_id)
        return path.read_text(encoding="utf-8")

    def validate(self) -> ProfileValidation:
        """
        Check every profile file and the default-profile invariant.

        Unreadable files and multiple defaults are errors. Zero defaults, a
        missing name, or an empty enabled_factors list are warnings.
        """
        validation = ProfileValidation()

        if not self.profiles_dir.is_dir():
            validation.add_error("Risk profiles directory not found")
            return validation

        files = self._profile_files()
        if not files:
            validation.add_error("No risk profile files found")
            return validation

        for path in files:
            try:
                raw = self._read_raw(path)
                profile = RiskProfile.from_yaml_dict(path.stem, raw)
            except _LOAD_ERRORS as e:
                validation.add_error(f"Failed to parse {path.name}: {e}")
                continue

            validation.default_profiles.append(
                DefaultProfileEntry(name=profile.name or path.name, file=path.name, is_default=profile.is_default)
            )
            if not profile.name:
                validation.warnings.append(f"Profile {path.name} missing 'name' field")
            if not profile.enabled_factors:
                validation.warnings.append(f"Profile {path.name} has no enabled factors")

        defaults = [p for p in validation.default_profiles if p.is_default]
        if not defaults:
            validation.warnings.append(
                "No risk profile marked as default (is_default: true); factors will not be filtered"
            )
        elif len(defaults) > 1:
            validation.add_error(
                f"Multiple risk profiles marked as default: {', '.join(p.name for p in defaults)}"
            )
            validation.add_error("Please ensure only ONE profile has is_default: true")

        return validation

    # ── Writing ──

    def save(self, profile: RiskProfile) -> str:
        """
        Write a profile to ``<sanitized id>.yaml`` and return the id.

        Raises:
            InvalidProfileIdError: the id is empty after sanitizing.
            MultipleDefaultProfilesError: the profile is flagged default while
                another stored profile already is.
        """
        profile_id = sanitize_profile_id(profile.id)

        if profile.is_default:
            others = [p for p in self.list_profiles() if p.is_default and p.id != profile_id]
            if others:
                raise MultipleDefaultProfilesError(
                    [f"{profile.name or profile_id} ({profile_id})"]
                    + [f"{p.name or p.id} ({p.id})" for p in others]
                )

        if profile.created_at is None:
            profile = profile.model_copy(
                update={"created_at": datetime.now(timezone.utc).isoformat()}
            )

        self.profiles_dir.mkdir(parents=True, exist_ok=True)
        existing = self._path_for(profile_id)
        path = existing or self.profiles_dir / f"{profile_id}.yaml"
        path.write_text(_dump_yaml(profile.to_yaml_dict()), encoding="utf-8")
        logger.info(f"Saved risk profile {profile_id} to {path}")
        return profile_id

    def set_default(self, profile_id: str) -> RiskProfile:
        """
        Make one profile the default and clear the flag on every other.

        The target is read and validated first, so a failed call leaves
        every file untouched.

        Raises:
            ProfileNotFoundError: no profile with that id exists.
            ProfileConfigurationError: the target profile cannot be read.
        """
        target = self._path_for(profile_id)
        if target is None:
            raise ProfileNotFoundError(profile_id)

        try:
            target_raw = self._read_raw(target)
            target_raw["is_default"] = True
            profile = RiskProfile.from_yaml_dict(target.stem, target_raw)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ProfileConfigurationError(f"Cannot make {target.name} the default: {e}") from e

        for path in self._profile_files():
            if path == target:
                continue
            try:
                raw = self._read_raw(path)
            except _LOAD_ERRORS as e:
                logger.warning(f"Skipping unreadable profile {path.name}: {e}")
                continue
            if raw.get("is_default"):
                raw["is_default"] = False
                path.write_text(_dump_yaml(raw), encoding="utf-8")
                logger.info(f"Cleared default flag on {path.name}")

        target.write_text(_dump_yaml(target_raw), encoding="utf-8")
        logger.info(f"Default risk profile set to {target.stem}")
        return profile

    def delete(self, profile_id: str) -> None:
        """
        Remove a user-created profile.

        Raises:
            ProfileNotFoundError: no profile with that id exists.
            SystemProfileError: the profile was created by the system.
            ProfileConfigurationError: the profile file cannot be read.
        """
        path = self._path_for(profile_id)
        if path is None:
            raise ProfileNotFoundError(profile_id)
        try:
            created_by = self._read_raw(path).get("created_by")
        except (OSError, yaml.YAMLError) as e:
            raise ProfileConfigurationError(f"Cannot read {path.name}: {e}") from e
        if created_by == SYSTEM_AUTHOR:
            raise SystemProfileError(profile_id)
        path.unlink()
        logger.info(f"Deleted risk profile {path.stem}")
