"""Core view resolution: settings, directive parsing, resolution and loaders."""
