"""Tests for configuration loading and merging."""

from pathlib import Path

import yaml

from lumbar_fs.deep_merge import deep_merge
from lumbar_fs.file_util import FileUtil
from lumbar_fs.load_config import DEFAULT_CONFIG, load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    assert deep_merge(base, update) == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    assert deep_merge(base, update) == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    assert deep_merge({"arr": [1, 2]}, {"arr": [3, 4]}) == {"arr": [3, 4]}


def test_deep_merge_suffixes_additive() -> None:
    """Verify that template suffixes are merged additively."""
    base = {"template_suffixes": [".handlebars", ".j2"]}
    update = {"template_suffixes": [".j2", ".hbs"]}
    merged = deep_merge(base, update)
    assert merged["template_suffixes"] == [".handlebars", ".hbs", ".j2"]


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config["retry_delay"] == 0.25
    assert config["ignored_names"] == ["vendor"]


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that a YAML file overrides and extends the defaults."""
    path = tmp_path / "lumbar.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "lookup_path": "/srv/site",
                "retry_delay": 0.5,
                "template_suffixes": [".hbs"],
            }
        ),
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config["lookup_path"] == "/srv/site"
    assert config["retry_delay"] == 0.5
    assert ".hbs" in config["template_suffixes"]
    assert ".handlebars" in config["template_suffixes"]


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Verify that a missing file falls back to defaults."""
    assert load_config(str(tmp_path / "absent.yml")) == DEFAULT_CONFIG


async def test_from_config_wires_service(tmp_path: Path) -> None:
    """Verify that configuration reaches the resolver and the template loader."""
    (tmp_path / "page.hbs").write_text("{{ x }}", encoding="utf-8")
    config = deep_merge(
        DEFAULT_CONFIG, {"lookup_path": str(tmp_path), "template_suffixes": [".hbs"]}
    )
    util = FileUtil.from_config(config)

    assert util.lookup_path() == f"{tmp_path}/"
    template = await util.load_template("page.hbs")
    assert template.render(x="ok") == "ok"
