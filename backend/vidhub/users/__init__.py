"""Profile updates, subscriptions and channel pages."""
