"""Infrastructure — database sessions, logging and HTTP middleware (the imperative shell)."""
