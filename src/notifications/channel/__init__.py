"""Channel adapter registry — pluggable order confirmation dispatch.

Uses the fake email adapter by default; a real provider adapter can be
selected with the EMAIL_ADAPTER environment variable.
"""

import os

_email_instance = None


def get_email_channel():
    """Return the configured order confirmation adapter (singleton)."""
    global _email_instance
    if _email_instance is None:
        adapter = os.environ.get("EMAIL_ADAPTER", "fake")
        if adapter == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _email_instance = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")
    return _email_instance


def reset_channels():
    """Reset the channel singleton (useful for testing)."""
    global _email_instance
    _email_instance = None
