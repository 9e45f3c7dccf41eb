"""Exception hierarchy for xdiff.

Every error raised by the library derives from :class:`XdiffError` so the CLI
can render it as a single message instead of a traceback.
"""


class XdiffError(Exception):
    """Base class for all xdiff errors."""


class ConfigParseError(XdiffError):
    """A profile document could not be read or has the wrong structure."""


class ProfileNotFound(XdiffError):
    """The requested profile name does not exist in the loaded config."""

    def __init__(self, name: str, source: str | None = None):
        self.name = name
        self.source = source
        where = f" in config file {source}" if source else ""
        super().__init__(f"Profile {name!r} not found{where}")


class ValidationError(XdiffError):
    """One or more profiles failed validation.

    ``failures`` maps each offending profile name to the error that caused it.
    """

    def __init__(self, message: str, failures: dict[str, Exception] | None = None):
        self.failures = failures or {}
        super().__init__(message)


class InvalidShape(ValidationError):
    """A request field has the wrong type (e.g. ``params`` is a list)."""


class InvalidOverrideKey(XdiffError):
    """An override directive is malformed or uses an unknown sigil."""


class UnsupportedContentType(XdiffError):
    """The request body cannot be serialized for the given content type."""

    def __init__(self, content_type: str | None):
        self.content_type = content_type
        super().__init__(f"Unsupported content type: {content_type!r}")


class TransportError(XdiffError):
    """The HTTP transport failed (connection, TLS, protocol or timeout)."""


class BodyDecodeError(XdiffError):
    """A response declared as JSON does not contain valid JSON."""


class RenderError(XdiffError):
    """Rendered output could not be written."""
