"""Domain services for the shared counter, presence and activity log."""
