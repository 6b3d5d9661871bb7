"""ClipScribe — review workflow for AI-suggested video clips."""

__version__ = "0.1.0"
