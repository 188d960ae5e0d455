"""Collaborator implementations for the reference resolvers."""
