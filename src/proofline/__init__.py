"""proofline - suggestion lifecycle and text-sync engine for a writing assistant."""

__version__ = "0.1.0"
