"""
Classifieds Server Package.

This package contains the web server implementation for the marketplace.
It includes the API definition, configuration, services and error handling.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    services: Dependencies, image storage, live message feed, exports and analytics.
    exception_handlers: Mapping of domain errors and unhandled exceptions to JSON.
    middleware: Request tracing and logging.
"""
