from scoped_consumer._internal.integrations.pytest_plugin import scoped_consumer

__all__ = ["scoped_consumer"]
