"""Configuration, database, logging and error primitives."""
