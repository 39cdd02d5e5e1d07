"""Runtime wiring shared by the API and the CLI."""
