"""Upload build artifacts to Firebase App Distribution from CI."""

__version__ = "0.1.0"
