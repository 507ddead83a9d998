"""
Service layer.

Each service encapsulates the business rules for a domain and receives
its storage collaborator through its constructor.  Every operation
takes the caller's ``Identity`` explicitly; there is no ambient
request state.
"""
