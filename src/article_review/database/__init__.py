"""Cosmos DB client and repositories."""
