"""
Centralized configuration for the comment_density package.

The two user-facing settings (minimum comment ratio and the placeholder
comment text) plus the policy switches live in a single dataclass so the
analyzer never reads ambient state.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from comment_density.exceptions import InvalidConfigurationError
from comment_density.models import ClassificationPolicy, InsertionPolicy
from comment_density.ratio import check_min_ratio

logger = logging.getLogger(__name__)

# Prefix used by the editor settings namespace ("fixStaticCheck.minCommentRatio")
SETTINGS_NAMESPACE = "fixStaticCheck"


@dataclass
class CommentDensityConfig:
    """
    Configuration object for one comment-density command invocation.
    Instantiate with defaults or override specific values.

    Example:
        config = CommentDensityConfig(min_comment_ratio=0.3)
        config = CommentDensityConfig.from_env()
    """

    # --- Ratio ---
    min_comment_ratio: float = 0.25

    # --- Placeholder comments ---
    auto_insert_comment_value: str = "fix METRICS-19"
    max_comment_value_length: int = 60
    comment_prefix: str = "// "

    # --- Policies ---
    classification_policy: ClassificationPolicy = ClassificationPolicy.FIRST_PASS
    insertion_policy: InsertionPolicy = InsertionPolicy.SINGLE

    def __post_init__(self):
        """Normalize policy strings and bound the comment value length."""
        if not isinstance(self.max_comment_value_length, int) or self.max_comment_value_length < 1:
            raise InvalidConfigurationError(
                "max_comment_value_length", self.max_comment_value_length, "must be an integer >= 1"
            )

        self.classification_policy = ClassificationPolicy.from_string(self.classification_policy)
        self.insertion_policy = InsertionPolicy.from_string(self.insertion_policy)

        value = self.auto_insert_comment_value or ""
        if len(value) > self.max_comment_value_length:
            logger.debug(
                f"Truncating autoInsertCommentValue from {len(value)} "
                f"to {self.max_comment_value_length} characters"
            )
            value = value[: self.max_comment_value_length]
        self.auto_insert_comment_value = value

    @classmethod
    def from_env(cls, base: Optional["CommentDensityConfig"] = None) -> "CommentDensityConfig":
        """
        Create a configuration from environment variables.
        Environment variables are prefixed with COMMENT_DENSITY_.
        """
        kwargs: Dict[str, Any] = {}

        env_map = {
            "COMMENT_DENSITY_MIN_RATIO": ("min_comment_ratio", float),
            "COMMENT_DENSITY_COMMENT_VALUE": ("auto_insert_comment_value", str),
            "COMMENT_DENSITY_POLICY": ("classification_policy", str),
            "COMMENT_DENSITY_INSERT_MODE": ("insertion_policy", str),
        }

        for env_key, (field_name, converter) in env_map.items():
            val = os.environ.get(env_key)
            if val is None:
                continue
            try:
                kwargs[field_name] = converter(val)
            except (ValueError, TypeError):
                raise InvalidConfigurationError(field_name, val, f"cannot parse {env_key}")

        if base is not None:
            return base.merged(**kwargs)
        return cls(**kwargs)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "CommentDensityConfig":
        """
        Create a configuration from editor-style settings.

        Recognised keys are ``minCommentRatio`` and ``autoInsertCommentValue``,
        optionally namespaced as ``fixStaticCheck.<key>``; ``classificationPolicy``
        and ``insertionPolicy`` select the algorithms. Unknown keys are ignored.
        """
        key_map = {
            "minCommentRatio": "min_comment_ratio",
            "autoInsertCommentValue": "auto_insert_comment_value",
            "classificationPolicy": "classification_policy",
            "insertionPolicy": "insertion_policy",
        }
        kwargs: Dict[str, Any] = {}
        for key, value in settings.items():
            short_key = key
            if key.startswith(SETTINGS_NAMESPACE + "."):
                short_key = key[len(SETTINGS_NAMESPACE) + 1:]
            field_name = key_map.get(short_key)
            if field_name is None:
                continue
            if field_name == "min_comment_ratio":
                try:
                    value = float(value)
                except (ValueError, TypeError):
                    raise InvalidConfigurationError(field_name, value, "must be a number")
            elif value is not None:
                value = str(value)
            kwargs[field_name] = value
        return cls(**kwargs)

    @classmethod
    def from_settings_file(cls, path: str) -> "CommentDensityConfig":
        """Load settings from a JSON file (e.g. an editor settings.json)."""
        settings_path = Path(path)
        try:
            data = json.loads(settings_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigurationError("settings_file", str(path), str(e))
        if not isinstance(data, dict):
            raise InvalidConfigurationError("settings_file", str(path), "top level must be an object")
        return cls.from_settings(data)

    def merged(self, **overrides: Any) -> "CommentDensityConfig":
        """Return a copy with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if v is not None and k in known}
        return replace(self, **changes)

    def validate(self) -> List[str]:
        """
        Validate configuration values and return list of warnings.
        Returns empty list if all values are valid.
        """
        warnings = []

        ratio = self.min_comment_ratio
        if not isinstance(ratio, (int, float)) or math.isnan(ratio):
            warnings.append(f"min_comment_ratio must be a number, got {ratio!r}")
        elif ratio < 0:
            warnings.append(f"min_comment_ratio must be >= 0, got {ratio}")
        elif ratio >= 1:
            warnings.append(f"min_comment_ratio must be < 1, got {ratio}")

        if not self.auto_insert_comment_value.strip():
            warnings.append("auto_insert_comment_value is empty; placeholder comments will be bare")

        return warnings

    def ensure_valid(self) -> "CommentDensityConfig":
        """Raise InvalidConfigurationError if the ratio cannot be used."""
        check_min_ratio(self.min_comment_ratio)
        return self


# Module-level default configuration instance
DEFAULT_CONFIG = CommentDensityConfig()
