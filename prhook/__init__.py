"""Pull request webhook trigger."""

__version__ = "0.1.0"
