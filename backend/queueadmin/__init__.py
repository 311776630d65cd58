"""Queue admin dashboard backend."""
