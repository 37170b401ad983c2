"""Tests for the built-in sample data registry."""

import pytest

from story_generator.memory.builtin_data import (
    SampleDataRegistry,
    get_builtin_pools,
    get_builtin_registry,
)
from story_generator.utils.exceptions import SampleDataError


def _write_pools(data_dir, body: str) -> None:
    (data_dir / "pools.yaml").write_text(body, encoding="utf-8")


def _write_template(data_dir, name: str, body: str) -> None:
    templates_dir = data_dir / "templates"
    templates_dir.mkdir(exist_ok=True)
    (templates_dir / name).write_text(body, encoding="utf-8")


class TestBuiltinRegistry:
    """Tests against the data shipped with the package."""

    def test_loads_five_templates(self):
        """All five genres are available."""
        registry = SampleDataRegistry()
        genres = sorted(t.genre for t in registry.story_templates.values())
        assert genres == ["Cyberpunk", "Fantasy", "Mystery", "Post-Apocalyptic", "Space Opera"]

    def test_template_lookup_by_id(self):
        """Templates are keyed by their id."""
        registry = SampleDataRegistry()
        assert registry.get_story_template("cyberpunk").genre == "Cyberpunk"
        assert registry.get_story_template("western") is None

    def test_pools_are_populated(self):
        """Names, locations and traits are all non-empty."""
        pools = get_builtin_pools()
        assert pools.names
        assert pools.location_names
        assert pools.traits
        assert len(pools.templates) == 5
        assert pools.empty_required_pools() == []

    def test_pools_without_templates(self):
        """include_templates=False leaves the template pool empty."""
        pools = get_builtin_pools(include_templates=False)
        assert pools.templates == []
        assert pools.names

    def test_builtin_registry_is_cached(self):
        """The module-level registry is created once."""
        assert get_builtin_registry() is get_builtin_registry()

    def test_repr(self):
        """repr mentions template count."""
        assert "5 templates" in repr(SampleDataRegistry())


class TestCustomDataDirectory:
    """Tests against data written to a temp directory."""

    def test_template_id_defaults_to_file_stem(self, tmp_path):
        """A template without an id takes its file name."""
        _write_template(tmp_path, "noir.yaml", "genre: Noir\nsetting: Rainy city\n")
        _write_pools(tmp_path, "names: [Sam]\nlocation_names: [Bar]\ntraits: [tired]\n")
        registry = SampleDataRegistry(tmp_path)
        assert registry.get_story_template("noir").setting == "Rainy city"
        pools = registry.entity_pools()
        assert pools.names == ["Sam"]
        assert pools.location_names == ["Bar"]

    def test_missing_directory_raises(self, tmp_path):
        """A data directory that does not exist is an error."""
        with pytest.raises(SampleDataError, match="does not exist"):
            SampleDataRegistry(tmp_path / "nope")

    def test_invalid_yaml_raises(self, tmp_path):
        """Broken YAML is reported."""
        _write_template(tmp_path, "bad.yaml", "genre: [unclosed\n")
        with pytest.raises(SampleDataError, match="bad.yaml"):
            SampleDataRegistry(tmp_path)

    def test_template_missing_genre_raises(self, tmp_path):
        """Templates must have a genre."""
        _write_template(tmp_path, "empty.yaml", "setting: Somewhere\n")
        with pytest.raises(SampleDataError, match="Invalid template"):
            SampleDataRegistry(tmp_path)

    def test_template_with_mapping_tag_raises(self, tmp_path):
        """A tag that is not a string is reported as an invalid template."""
        _write_template(tmp_path, "bad.yaml", "genre: Noir\ntags:\n  - {a: 1}\n")
        with pytest.raises(SampleDataError, match="Invalid template"):
            SampleDataRegistry(tmp_path)

    def test_template_with_nested_list_tag_raises(self, tmp_path):
        """Nested lists in tags are reported as an invalid template."""
        _write_template(tmp_path, "bad.yaml", "genre: Noir\ntags: [[a, b], c]\n")
        with pytest.raises(SampleDataError, match="bad.yaml"):
            SampleDataRegistry(tmp_path)

    def test_non_mapping_file_raises(self, tmp_path):
        """Top-level YAML must be a mapping."""
        _write_pools(tmp_path, "- just\n- a list\n")
        with pytest.raises(SampleDataError, match="Expected dict"):
            SampleDataRegistry(tmp_path)

    def test_pool_must_be_list_of_strings(self, tmp_path):
        """Pools holding non-strings are rejected."""
        _write_pools(tmp_path, "names: [Sam, 3]\n")
        with pytest.raises(SampleDataError, match="names"):
            SampleDataRegistry(tmp_path)

    def test_collects_all_errors(self, tmp_path):
        """Every broken file is listed in one error."""
        _write_template(tmp_path, "a.yaml", "setting: no genre\n")
        _write_template(tmp_path, "b.yaml", "setting: no genre either\n")
        with pytest.raises(SampleDataError, match="Failed to load 2 sample data file"):
            SampleDataRegistry(tmp_path)

    def test_empty_directory_gives_empty_pools(self, tmp_path):
        """No files means no templates and empty pools, not an error."""
        registry = SampleDataRegistry(tmp_path)
        pools = registry.entity_pools()
        assert pools.templates == []
        assert pools.empty_required_pools() == ["names", "traits"]
