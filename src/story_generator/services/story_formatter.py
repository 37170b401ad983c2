"""Plain-text rendering of a finished story run."""

from story_generator.memory.dialogue import DialogueNode
from story_generator.services.story_pipeline import StoryResult

INDENT = "  "


def format_dialogue_tree(root: DialogueNode) -> list[str]:
    """Render every node pre-order, indented two spaces per level.

    No flag filtering is applied; the whole tree is shown.
    """
    return [f'{INDENT * depth}{node.speaker}: "{node.line}"' for depth, node in root.walk()]


def format_story(result: StoryResult) -> str:
    """Render a StoryResult as the console report."""
    template = result.template
    lines = [
        "=== GENERATED STORY ===",
        f"Genre: {template.genre}",
        f"Setting: {template.setting}",
    ]

    if result.characters:
        lead = result.characters[0]
        traits = ", ".join(lead.personality_traits)
        lines.append(f"Main Character: {lead.name}, a {traits} {template.genre.lower()} character")
    else:
        lines.append("Main Character: [No characters generated]")

    lines.append(f"Conflict: {template.conflict}")
    lines.append(f"Resolution: {template.resolution}")

    lines.extend(["", "Characters:"])
    if result.characters:
        lines.extend(f"- {character}" for character in result.characters)
    else:
        lines.append("- [No characters generated]")

    lines.extend(["", "Locations:"])
    if result.locations:
        lines.extend(f"- {location.name} ({location.tone})" for location in result.locations)
    else:
        lines.append("- [No locations generated]")

    lines.extend(["", "Story Beats:"])
    if result.events_generated:
        lines.extend(f"{i}. {beat}" for i, beat in enumerate(result.beats, start=1))
    else:
        lines.append(
            "1. [Story events could not be generated - insufficient characters or locations]"
        )

    lines.extend(["", "Dialogue Sample:"])
    if result.dialogue is not None:
        lines.extend(format_dialogue_tree(result.dialogue))
    else:
        lines.append("[No dialogue generated]")

    if result.narrative:
        lines.extend(["", "Narrative:", result.narrative])

    snapshot = result.world_state
    lines.extend(
        [
            "",
            f"World State: {len(snapshot.completed_events)} events completed, "
            f"{len(snapshot.flags)} flags set, {snapshot.story_progression}% progression",
            f"Tension: {snapshot.tension_level}/10, Morality: {snapshot.morality:+.2f}",
        ]
    )
    return "\n".join(lines)
