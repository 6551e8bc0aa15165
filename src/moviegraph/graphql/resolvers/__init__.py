"""Resolver package for the GraphQL schema.

Root and field resolvers referenced by the GraphQL types, queries, and
mutations. Resolvers read stores from the operation context only.
"""
