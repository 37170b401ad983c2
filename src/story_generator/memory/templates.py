"""Story template model and the built-in fallback template."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def dedupe_preserving_order(values: Any) -> Any:
    """Drop repeated entries from a list of strings, keeping first occurrences.

    Non-list input, or a list holding anything but strings, is returned
    unchanged so pydantic can report the type error.
    """
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        return values
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class StoryTemplate(BaseModel):
    """Genre template selected once per run.

    Frozen: a template never changes after it has been chosen for a story.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Slug identifying the template")
    genre: str
    setting: str = ""
    conflict: str = ""
    resolution: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list, description="Tags for filtering")

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, v: Any) -> Any:
        """Keep tags an ordered set."""
        return dedupe_preserving_order(v)

    def __str__(self) -> str:
        return (
            f"Genre: {self.genre}\nSetting: {self.setting}\n"
            f"Conflict: {self.conflict}\nResolution: {self.resolution}"
        )


def default_template() -> StoryTemplate:
    """Build the fixed template used when the template pool is empty."""
    return StoryTemplate(
        id="default-cyberpunk",
        genre="Cyberpunk",
        setting="Ruined megacity",
        conflict="The city's AI overlord has kidnapped the protagonist's brother",
        resolution=(
            "The protagonist must choose between sacrificing themselves "
            "or exposing the city's secrets"
        ),
        tags=["cyberpunk", "family", "sacrifice", "technology"],
    )
