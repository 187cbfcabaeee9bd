"""Load and manage layout profiles (per-source tuning of geometry thresholds)."""
import logging
from pathlib import Path
from typing import Dict, Optional, List
import yaml

from .settings import (
    LAYOUT_PROFILES_DIR,
    Y_THRESHOLD,
    X_THRESHOLD,
    CAP_RATE_MAX,
    MIN_PRIMARY_FRAGMENTS,
    PDF_X_TOLERANCE,
    PDF_Y_TOLERANCE,
)

logger = logging.getLogger(__name__)


class LayoutProfile:
    """Represents a named set of layout thresholds for one document family."""

    def __init__(self, config_dict: dict, profile_name: str):
        """Initialize layout profile from dictionary."""
        self.profile_name = profile_name
        self._config = config_dict or {}

    @property
    def description(self) -> str:
        """Human readable description of the document family."""
        return self._config.get('description', '')

    @property
    def identifiers(self) -> List[str]:
        """Strings whose presence in the first page selects this profile."""
        return self._config.get('identifiers', [])

    @property
    def y_threshold(self) -> float:
        """Row clustering tolerance."""
        return float(self._config.get('y_threshold', Y_THRESHOLD))

    @property
    def x_threshold(self) -> float:
        """Continuation column alignment tolerance."""
        return float(self._config.get('x_threshold', X_THRESHOLD))

    @property
    def cap_rate_max(self) -> float:
        """Exclusive upper bound for a plausible cap rate."""
        return float(self._config.get('cap_rate_max', CAP_RATE_MAX))

    @property
    def min_primary_fragments(self) -> int:
        """Minimum fragment count for a primary row."""
        return int(self._config.get('min_primary_fragments', MIN_PRIMARY_FRAGMENTS))

    @property
    def pdfplumber_word_kwargs(self) -> dict:
        """Keyword args for pdfplumber ``extract_words``."""
        kwargs = {
            'keep_blank_chars': True,
            'x_tolerance': PDF_X_TOLERANCE,
            'y_tolerance': PDF_Y_TOLERANCE,
        }
        kwargs.update(self._config.get('pdfplumber_word_kwargs') or {})
        return kwargs

    def get(self, key: str, default=None):
        """Get any config value by key."""
        return self._config.get(key, default)

    def __repr__(self) -> str:
        return (
            f"LayoutProfile({self.profile_name!r}, y={self.y_threshold}, "
            f"x={self.x_threshold}, cap_rate_max={self.cap_rate_max})"
        )


def default_layout_profile() -> LayoutProfile:
    """Profile built purely from environment settings."""
    return LayoutProfile({}, 'default')


class LayoutProfileLoader:
    """Loads and manages layout profiles."""

    def __init__(self, config_dir: Path = LAYOUT_PROFILES_DIR):
        """
        Initialize profile loader.

        Args:
            config_dir: Directory containing layout profile YAML files
        """
        self.config_dir = config_dir
        self._profiles: Dict[str, LayoutProfile] = {}
        self._load_all_profiles()

    def _load_all_profiles(self) -> None:
        """Load all layout profile files."""
        if not self.config_dir.exists():
            logger.warning(f"Layout profile directory not found: {self.config_dir}")
            return

        yaml_files = sorted(self.config_dir.glob("*.yaml")) + sorted(self.config_dir.glob("*.yml"))

        if not yaml_files:
            logger.warning(f"No layout profiles found in {self.config_dir}")
            return

        for yaml_file in yaml_files:
            try:
                self._load_profile(yaml_file)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load layout profile {yaml_file}: {e}")

        logger.debug(f"Loaded {len(self._profiles)} layout profiles")

    def _load_profile(self, yaml_file: Path) -> None:
        """
        Load a single layout profile file.

        Args:
            yaml_file: Path to YAML profile file
        """
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Each YAML file has a top-level key with the profile name
        # e.g., default: {...}
        for profile_name, config_dict in data.items():
            if isinstance(config_dict, dict):
                self._profiles[profile_name.lower()] = LayoutProfile(config_dict, profile_name)
                logger.debug(f"Loaded layout profile {profile_name}")

    def get_profile(self, profile_name: str) -> Optional[LayoutProfile]:
        """
        Get a layout profile by name.

        Args:
            profile_name: Profile name (case-insensitive)

        Returns:
            LayoutProfile or None if not found
        """
        return self._profiles.get(profile_name.lower())

    def detect_profile(self, text: str) -> Optional[LayoutProfile]:
        """
        Detect profile from first-page text using identifiers.

        Args:
            text: Text of the document's first page

        Returns:
            LayoutProfile or None if no identifier matched
        """
        header_text = text[:2000].lower()

        for profile_name, profile in self._profiles.items():
            for identifier in profile.identifiers:
                if identifier.lower() in header_text:
                    logger.info(f"Detected layout profile: {profile_name}")
                    return profile

        return None

    def get_all_profiles(self) -> List[str]:
        """Get list of all profile names."""
        return list(self._profiles.keys())

    @property
    def profile_count(self) -> int:
        """Get count of loaded profiles."""
        return len(self._profiles)


# Singleton instance
_loader: Optional[LayoutProfileLoader] = None


def get_layout_profile_loader() -> LayoutProfileLoader:
    """Get singleton instance of LayoutProfileLoader."""
    global _loader
    if _loader is None:
        _loader = LayoutProfileLoader()
    return _loader
