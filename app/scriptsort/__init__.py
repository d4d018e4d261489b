"""scriptsort - Deterministic ordering of shell startup scripts."""

__version__ = "0.1.0"
