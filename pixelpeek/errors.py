class PixelPeekError(Exception):
    """Base class for all PixelPeek errors."""


class ConfigError(PixelPeekError):
    pass


class JudgeError(PixelPeekError):
    """The semantic judge could not produce a usable verdict."""


class HintGenerationError(PixelPeekError):
    """The hint generator returned nothing usable."""


class SourceError(PixelPeekError):
    """The image source could not supply a description/label pair."""


class ProviderError(PixelPeekError):
    """An LLM provider answered with a non-success status."""
