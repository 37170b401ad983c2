"""Registry for loading built-in story templates and entity pools from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from story_generator.memory.pools import EntityPools
from story_generator.memory.templates import StoryTemplate
from story_generator.utils.exceptions import SampleDataError

logger = logging.getLogger(__name__)

# Data directory (same directory as this file)
_DATA_DIR = Path(__file__).parent

POOLS_FILE_NAME = "pools.yaml"
_POOL_KEYS = ("names", "location_names", "traits")


class SampleDataRegistry:
    """Registry that loads built-in sample data from YAML files.

    Files are organized as:
    ```
    builtin_data/
    ├── pools.yaml          # names, location_names, traits
    └── templates/
        ├── cyberpunk.yaml
        ├── fantasy.yaml
        └── ...
    ```
    """

    def __init__(self, data_dir: Path | str | None = None):
        """Create a registry and load all sample data from the given directory.

        Args:
            data_dir: Directory holding pools.yaml and templates/. Defaults to
                the package's built-in data directory.

        Raises:
            SampleDataError: If the directory does not exist or any file fails to load.
        """
        self.data_dir = Path(data_dir) if data_dir else _DATA_DIR
        if not self.data_dir.exists():
            raise SampleDataError(f"Sample data directory does not exist: {self.data_dir}")
        logger.info("Initializing SampleDataRegistry from %s", self.data_dir)
        self._templates: dict[str, StoryTemplate] = {}
        self._pools: dict[str, list[str]] = {key: [] for key in _POOL_KEYS}
        self._load_all()

    def _load_yaml_file(self, filepath: Path) -> dict[str, Any]:
        """Load and parse a YAML file into a dictionary.

        Raises:
            SampleDataError: If the file cannot be read, is invalid YAML, or is not a mapping.
        """
        try:
            with open(filepath, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SampleDataError(f"Invalid YAML in {filepath}: {e}") from e
        except OSError as e:
            raise SampleDataError(f"Failed to read {filepath}: {e}") from e
        if not isinstance(data, dict):
            raise SampleDataError(f"Expected dict in {filepath}, got {type(data).__name__}")
        return data

    def _load_template(self, filepath: Path) -> None:
        data = self._load_yaml_file(filepath)
        data.setdefault("id", filepath.stem)
        try:
            template = StoryTemplate.model_validate(data)
        except ValidationError as e:
            raise SampleDataError(f"Invalid template in {filepath}: {e}") from e
        self._templates[template.id] = template
        logger.debug("Loaded story template: %s", template.id)

    def _load_pools(self, filepath: Path) -> None:
        data = self._load_yaml_file(filepath)
        for key in _POOL_KEYS:
            values = data.get(key, [])
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise SampleDataError(f"Pool '{key}' in {filepath} must be a list of strings")
            self._pools[key] = values
        logger.debug(
            "Loaded pools: %d names, %d locations, %d traits",
            len(self._pools["names"]),
            len(self._pools["location_names"]),
            len(self._pools["traits"]),
        )

    def _load_all(self) -> None:
        """Load every template file and the pools file, failing after collecting all errors."""
        errors: list[str] = []

        templates_dir = self.data_dir / "templates"
        if templates_dir.exists():
            yaml_files = sorted(templates_dir.glob("*.yaml"))
            logger.info("Loading %d story templates from %s", len(yaml_files), templates_dir)
            for yaml_file in yaml_files:
                try:
                    self._load_template(yaml_file)
                except SampleDataError as e:
                    errors.append(f"template {yaml_file.name}: {e}")
        else:
            logger.warning("Templates directory not found: %s", templates_dir)

        pools_file = self.data_dir / POOLS_FILE_NAME
        if pools_file.exists():
            try:
                self._load_pools(pools_file)
            except SampleDataError as e:
                errors.append(f"pools {pools_file.name}: {e}")
        else:
            logger.warning("Pools file not found: %s", pools_file)

        if errors:
            error_msg = f"Failed to load {len(errors)} sample data file(s):\n" + "\n".join(
                f"  - {e}" for e in errors
            )
            logger.error(error_msg)
            raise SampleDataError(error_msg)

        logger.info("Loaded %d story templates", len(self._templates))

    @property
    def story_templates(self) -> dict[str, StoryTemplate]:
        """Loaded templates keyed by id."""
        return self._templates

    def get_story_template(self, template_id: str) -> StoryTemplate | None:
        """Get a story template by id, or None if unknown."""
        template = self._templates.get(template_id)
        if template is None:
            logger.debug("Story template not found: %s", template_id)
        return template

    def entity_pools(self, include_templates: bool = True) -> EntityPools:
        """Bundle the loaded data into an EntityPools value.

        Args:
            include_templates: If False, the template pool is left empty so the
                pipeline falls back to its default template.
        """
        return EntityPools(
            templates=list(self._templates.values()) if include_templates else [],
            names=list(self._pools["names"]),
            location_names=list(self._pools["location_names"]),
            traits=list(self._pools["traits"]),
        )

    def __repr__(self) -> str:
        return (
            f"SampleDataRegistry({len(self._templates)} templates, "
            f"{len(self._pools['names'])} names from {self.data_dir})"
        )


_registry: SampleDataRegistry | None = None


def get_builtin_registry() -> SampleDataRegistry:
    """Return the lazily created registry over the package's built-in data."""
    global _registry
    if _registry is None:
        _registry = SampleDataRegistry()
    return _registry


def get_builtin_pools(include_templates: bool = True) -> EntityPools:
    """Entity pools built from the package's built-in data."""
    return get_builtin_registry().entity_pools(include_templates=include_templates)
