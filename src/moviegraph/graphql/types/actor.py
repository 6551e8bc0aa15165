"""
Actor GraphQL type definitions
"""

import strawberry


@strawberry.type
class Actor:
    """Actor type for GraphQL API."""

    id: strawberry.ID
    name: str
