"""Source and RouteMatch frozen dataclasses."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Source:
    """Where a vanity prefix really lives.

    Both fields are opaque: ``vcs`` is copied into the ``go-import`` meta
    tag as-is and never checked against a real VCS client.
    """

    vcs: str
    url: str


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution.

    ``root`` is the registered prefix that matched, which is what the
    ``go`` tool expects as the import-path root.
    """

    source: Source
    root: str

    @property
    def vcs(self) -> str:
        return self.source.vcs

    @property
    def url(self) -> str:
        return self.source.url
