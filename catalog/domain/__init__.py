"""Domain types (Document, User, Product) and their JSON codec."""
