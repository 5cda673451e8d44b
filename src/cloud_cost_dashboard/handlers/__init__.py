"""Lambda handlers for Cloud Cost Dashboard."""
