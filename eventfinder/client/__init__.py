"""
Client application layer: gateway client, client-side state and the
search / favorites / event detail view controllers.
"""
