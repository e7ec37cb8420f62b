class ServiceError(Exception):
    pass


class GenAIConfigurationError(ServiceError):
    pass


class GenerationFailedError(ServiceError):
    pass


class RateLimitedError(GenerationFailedError):
    pass
