"""Account Directory API."""
