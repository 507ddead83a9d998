"""
Storage collaborators.

Repositories own every SQL statement in the application.  Services
receive repository instances and never touch ``core.db`` directly, so
tests can substitute in-memory fakes.
"""
