"""gocoveralls - Go coverage profiles to Coveralls-compatible coverage jobs."""

__version__ = "0.1.0"
