"""Business logic for articles, revisions and reviews."""
