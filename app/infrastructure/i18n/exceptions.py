"""Custom exceptions for the i18n system.

Only setup can fail: locale resolution and translation degrade to
fallback values instead of raising.
"""


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            i18n = create_i18n(config)
        except I18nError as e:
            logger.error("i18n_setup_failed", error=str(e))
    """

    pass


class ConfigError(I18nError, ValueError):
    """Raised when the i18n configuration is invalid.

    Examples: an unparseable locale identifier, an empty supported set in
    strict mode, or no localization source at all.
    """

    pass


class LocalizationLoadError(ConfigError):
    """Raised when a localization file is missing or cannot be decoded."""

    pass
