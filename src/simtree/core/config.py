"""
Resolution configuration for simtree lookups.

Holds the small set of policy switches shared by the query engine, the path
evaluator and the attribute accessor. Instances are immutable and passed
explicitly; there is no module-level default that callers can mutate.
"""

from attrs import frozen


@frozen
class ResolutionConfig:
    """Policy switches for name matching and attribute writes.

    Attributes:
        case_sensitive: Match node names by exact ordinal equality. When False,
            names are compared after `str.casefold`.
        numeric_widening: Accept int values for float attributes on write.
    """

    case_sensitive: bool = True
    numeric_widening: bool = True

    @classmethod
    def from_dict(cls, config: dict | None = None) -> "ResolutionConfig":
        """Factory method to create config from dict with defaults."""
        if config is None:
            config = {}
        return cls(**config)

    def names_match(self, candidate: str, wanted: str) -> bool:
        """Compare two node names under this configuration's case policy."""
        if self.case_sensitive:
            return candidate == wanted
        return candidate.casefold() == wanted.casefold()


DEFAULT_CONFIG = ResolutionConfig()
