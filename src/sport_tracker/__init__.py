"""Sport Tracker: workout logging and weekly leaderboards over Telegram."""

__version__ = "0.1.0"
