"""Logic for loading and merging configuration files."""

from pathlib import Path
from typing import Any

import yaml

from lumbar_fs.deep_merge import deep_merge
from lumbar_fs.resource_expander import DEFAULT_IGNORED_NAMES
from lumbar_fs.retry_on_exhaustion import DEFAULT_RETRY_DELAY
from lumbar_fs.template_loader import DEFAULT_TEMPLATE_SUFFIXES

DEFAULT_CONFIG: dict[str, Any] = {
    "lookup_path": None,
    "retry_delay": DEFAULT_RETRY_DELAY,
    "template_suffixes": list(DEFAULT_TEMPLATE_SUFFIXES),
    "ignored_names": list(DEFAULT_IGNORED_NAMES),
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
