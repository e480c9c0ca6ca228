"""Youth flag football roster, stat tracking and leaderboards."""

__version__ = "0.1.0"
