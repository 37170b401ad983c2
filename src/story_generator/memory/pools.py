"""Entity pools - the raw material a story run draws from."""

from pydantic import BaseModel, ConfigDict, Field

from story_generator.memory.templates import StoryTemplate


class EntityPools(BaseModel):
    """Candidate templates, names, location names and personality traits.

    Pools are supplied from outside and not modified by generation.
    """

    model_config = ConfigDict(frozen=True)

    templates: list[StoryTemplate] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    location_names: list[str] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)

    def empty_required_pools(self) -> list[str]:
        """Return the names of pools that character generation cannot do without."""
        missing = []
        if not self.names:
            missing.append("names")
        if not self.traits:
            missing.append("traits")
        return missing
