"""Feature modules of the Players API service."""
