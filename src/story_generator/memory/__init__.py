"""Story data models: templates, entities, dialogue and world state."""
