"""Infrastructure adapters: repositories and session stores."""
