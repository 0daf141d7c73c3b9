"""Building blocks for a YAML task runner: shell commands, source fingerprinting, run hashes, task listing and the sleepit command."""

__version__ = "0.1.0"