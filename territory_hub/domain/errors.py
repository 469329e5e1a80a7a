"""Domain exceptions raised by use cases and translated to HTTP by the API layer."""


class TerritoryHubError(Exception):
    """Base class for expected business-rule failures."""


class NotFoundError(TerritoryHubError):
    pass


class ConflictError(TerritoryHubError):
    pass


class ValidationError(TerritoryHubError):
    pass


class PermissionDeniedError(TerritoryHubError):
    pass


class AuthenticationError(TerritoryHubError):
    pass
