"""Feature modules - users and their tasks."""
