"""Helpers shared by the CLI and the core package: validators and output formatting."""
