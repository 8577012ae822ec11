"""Financial dashboard source package."""
