"""Interface domain - command-line entry points."""
