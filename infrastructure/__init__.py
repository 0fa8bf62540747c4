"""
Infrastructure Package
======================

Abstraction layers for external dependencies.

Modules:
    - email: Email delivery (SMTP, mock)
    - events: Domain event bus (in-memory, Redis pub/sub)
    - container: Service locator wiring domain services to their dependencies
"""
