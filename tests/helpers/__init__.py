"""Test helper modules for the statefire test suite."""
