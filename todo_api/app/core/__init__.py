"""
Cross-cutting infrastructure: configuration, logging, errors, security
and database access.
"""
