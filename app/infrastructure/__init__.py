"""Infrastructure components shared by the content modules.

- configuration: Settings management (Settings, per-concern settings)
- logging: Structured logging (configure_logging, get_module_logger)
- models: Base Pydantic model configuration
- operations: Operation results (OperationResult, OperationStatus)
- persistence: SQLAlchemy base, engine, session scope
- services: Application-scoped providers (get_settings, get_session_factory)

Import from the subpackages directly, e.g.
``from infrastructure.operations import OperationResult``.
"""
