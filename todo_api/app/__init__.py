"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (todos, users) keeps its schemas, services
and repositories in the matching subpackage and exposes a router
defined in ``api/v1/endpoints``.  Versioning is handled by grouping
routers under the ``api/<version>/`` hierarchy.
"""
