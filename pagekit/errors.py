"""Error taxonomy for page composition."""


class PageKitError(Exception):
    """Base class for pagekit errors."""


class ConfigurationError(PageKitError):
    """An invalid parameter name or value was supplied to a setter."""


class InvalidElementError(PageKitError):
    """Something other than a page element was supplied where one is required."""


class InvalidSectionError(PageKitError):
    """An unknown page section name was requested."""


__all__ = [
    "ConfigurationError",
    "InvalidElementError",
    "InvalidSectionError",
    "PageKitError",
]
