"""Infrastructure: database engine and the SQLModel key/value store."""
