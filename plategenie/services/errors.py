class ServiceError(Exception):
    pass


class GeminiConfigurationError(ServiceError):
    pass


class CompletionFailedError(ServiceError):
    pass


class IdentityProviderError(ServiceError):
    pass
