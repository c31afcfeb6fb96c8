"""pacekit: daily budget-vs-actual pacing reports for ad campaigns."""

__version__ = "0.1.0"
