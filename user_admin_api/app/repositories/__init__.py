"""Database access objects, one per ORM model."""
