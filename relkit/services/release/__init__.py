"""Release workflow: version bump, version files, commands, controller."""
