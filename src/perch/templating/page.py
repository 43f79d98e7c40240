"""The go-import discovery page.

The template is compiled once when the app freezes and rendered per
request with the matched route. Autoescaping keeps hostile Host headers
and route values from breaking out of the meta tag.
"""

from kida import Environment

from perch.routing.route import RouteMatch

GO_IMPORT_PAGE = """\
<html>
	<head>
		<meta name="go-import" content="{{ host }}{{ root }} {{ vcs }} {{ url }}">
	</head>
	<body></body>
</html>"""


def create_environment() -> Environment:
    """Create the kida Environment used for discovery pages."""
    return Environment(autoescape=True)


class DiscoveryPage:
    """Compiled go-import page. Safe to share between threads."""

    __slots__ = ("_template",)

    def __init__(self, env: Environment | None = None, source: str = GO_IMPORT_PAGE) -> None:
        env = env or create_environment()
        self._template = env.from_string(source)

    def render(self, host: str, match: RouteMatch) -> str:
        return self._template.render(
            {
                "host": host,
                "root": match.root,
                "vcs": match.vcs,
                "url": match.url,
            }
        )
