"""hourtracker - compliance hour tracking for therapists in training."""

__version__ = "0.1.0"
