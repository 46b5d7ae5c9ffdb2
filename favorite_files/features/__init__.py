"""Features built on top of the persistence stores."""
