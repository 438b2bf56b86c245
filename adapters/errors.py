class AdapterError(RuntimeError):
    pass


class ConfigurationError(AdapterError):
    pass


class UnsupportedEngineError(AdapterError):
    pass


class ValidationError(AdapterError):
    pass


class DatabaseConnectionError(AdapterError):
    pass


class QueryError(AdapterError):
    pass
