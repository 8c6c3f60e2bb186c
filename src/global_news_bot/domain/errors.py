"""Error taxonomy. Caught at the smallest enclosing unit and turned into recorded outcomes."""


class NewsBotError(Exception):
    """Base class for all pipeline errors."""


class SourceUnavailable(NewsBotError):
    """One news source could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class GenerationDegraded(NewsBotError):
    """A generative collaborator (script, voice, media) failed or returned unusable output."""


class ConfigurationMissing(NewsBotError):
    """A required credential or setting is absent; the dependent step is skipped."""


class PublishFailed(NewsBotError):
    """The publish driver reported a failure for one step."""
