"""Service layer: request orchestration, side channels, catalog files and the CLI."""
