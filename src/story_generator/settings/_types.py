"""Constants shared by settings validation and the CLI."""

# Log level options
LOG_LEVELS: dict[str, str] = {
    "DEBUG": "Debug",
    "INFO": "Info",
    "WARNING": "Warning",
    "ERROR": "Error",
}

# Text provider strategies selectable by name
TEXT_PROVIDERS: dict[str, str] = {
    "none": "Disabled (placeholder content)",
    "placeholder": "Placeholder content",
    "ollama": "Local Ollama server",
}
