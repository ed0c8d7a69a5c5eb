"""Routes: path templates compiled to patterns, and generated back to URLs.

Template syntax::

    /users/{id}              placeholder, matches one path segment
    /users/{id:\\d+}          placeholder with an inline regex
    /users/{id::int}         placeholder with a registered type
    /blog[/{page::int}]      optional segment, may nest

A route with children is a group. Children extend the group's path and
inherit its attribute constraints, defaults, methods, and options.
Groups themselves never match a request.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from warble._internal.types import Parameters, Scalar
from warble.errors import MissingAttributes, RouteDefinitionError
from warble.routing.attribute import Attribute, resolve_type
from warble.routing.query import build_query, stringify
from warble.routing.route_set import RouteSet

if TYPE_CHECKING:
    from warble._internal.types import RoutableRequest

# Placeholder as written in a template, with its optional constraint
_DECLARATION = re.compile(r"\{(?P<name>[A-Za-z0-9_]+)(?:::(?P<type>\w+)|:(?P<regex>[^}]+))?\}")

# Tokens of a normalized template: bare placeholders and brackets
_TOKEN = re.compile(r"\{([A-Za-z0-9_]+)\}|\[|\]")

DEFAULT_ATTRIBUTE_REGEX = r"[^/]+"

DEFAULT_METHODS: tuple[str, ...] = (
    "GET",
    "HEAD",
    "POST",
    "OPTIONS",
    "CONNECT",
    "TRACE",
    "PUT",
    "DELETE",
)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A ``{name}`` token of a parsed template."""

    name: str


# Parsed template: literal text, placeholders, and nested optional groups
TemplateNode: TypeAlias = "str | Placeholder | list[TemplateNode]"


def parse_template(path: str) -> list[TemplateNode]:
    """Parse a normalized template into literals, placeholders and groups.

    Examples::

        "/a/{b}"      -> ["/a/", Placeholder("b")]
        "/a[/{b}]"    -> ["/a", ["/", Placeholder("b")]]

    Raises ``RouteDefinitionError`` on unbalanced brackets.
    """
    root: list[TemplateNode] = []
    stack = [root]
    position = 0
    for token in _TOKEN.finditer(path):
        if token.start() > position:
            stack[-1].append(path[position : token.start()])
        position = token.end()

        if token[0] == "[":
            group: list[TemplateNode] = []
            stack[-1].append(group)
            stack.append(group)
        elif token[0] == "]":
            if len(stack) == 1:
                msg = f'Unbalanced "]" in route path "{path}"'
                raise RouteDefinitionError(msg)
            stack.pop()
        else:
            stack[-1].append(Placeholder(token[1]))

    if position < len(path):
        stack[-1].append(path[position:])
    if len(stack) > 1:
        msg = f'Unclosed "[" in route path "{path}"'
        raise RouteDefinitionError(msg)
    return root


def _normalize(value: str | Iterable[str] | None, case: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return (case(value),)
    return tuple(case(item) for item in value)


class Route(RouteSet):
    """A routable path template, or a group of child routes.

    Usage::

        route = Route("/users/{id::int}", name="user", methods="GET")
        route.test(request)                 # -> bool
        route.generate({"id": 42})          # -> "/users/42"

    Raises ``RouteDefinitionError`` when the template declares the same
    placeholder twice, uses an unknown type, or has unbalanced brackets.
    """

    __slots__ = (
        "_attributes",
        "_groups",
        "_hosts",
        "_methods",
        "_parent",
        "_pattern",
        "context",
        "name",
        "options",
        "path",
        "priority",
    )

    def __init__(
        self,
        path: str = "",
        defaults: Mapping[str, Scalar | None] | None = None,
        requirements: Mapping[str, str | None] | None = None,
        name: str | None = None,
        methods: str | Iterable[str] | None = None,
        hosts: str | Iterable[str] | None = None,
        priority: int = -1,
        options: Mapping[str, Any] | None = None,
        context: Any = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.priority = priority
        self.options: dict[str, Any] = dict(options or {})
        self.context = context
        self._parent: Route | None = None
        self._attributes: dict[str, Attribute] = {}
        self._pattern: re.Pattern[str] | None = None
        self._groups: dict[str, str] = {}

        self.path = _DECLARATION.sub(self._declare, path)
        parse_template(self.path)

        for attribute_name, regex in (requirements or {}).items():
            self._local_attribute(attribute_name).set_regex(regex)
        for attribute_name, default in (defaults or {}).items():
            self._local_attribute(attribute_name).set_default(default)

        self._methods = _normalize(methods, str.upper)
        self._hosts = _normalize(hosts, str.lower)

    def _declare(self, declaration: re.Match[str]) -> str:
        name = declaration["name"]
        if name in self._attributes:
            msg = f'Duplicate attribute "{name}" in route path "{declaration.string}"'
            raise RouteDefinitionError(msg)

        attribute = self._local_attribute(name)
        if declaration["type"]:
            attribute.set_regex(resolve_type(declaration["type"]))
        elif declaration["regex"]:
            attribute.set_regex(declaration["regex"])
        return "{" + name + "}"

    def _local_attribute(self, name: str) -> Attribute:
        if name not in self._attributes:
            self._attributes[name] = Attribute(name, route=self)
        return self._attributes[name]

    def __repr__(self) -> str:
        return f"Route({self.path!r}, name={self.name!r})"

    # -- Tree --

    @property
    def parent(self) -> Route | None:
        return self._parent

    def set_parent(self, parent: Route | None) -> Route:
        """Attach to *parent*, dropping compiled patterns of this subtree."""
        if self._parent is not parent:
            self._invalidate()
        self._parent = parent
        return self

    def _invalidate(self) -> None:
        self._pattern = None
        for child in self._routes:
            child._invalidate()

    def _adopt(self, route: Route) -> None:
        route.set_parent(self)

    def is_group(self) -> bool:
        return len(self._routes) > 0

    def get_path(self) -> str:
        """Full template: ancestors' paths followed by this route's."""
        if self._parent is None:
            return self.path
        return self._parent.get_path() + self.path

    # -- Attributes, methods, hosts, options --

    @property
    def attributes(self) -> Mapping[str, Attribute]:
        """Attributes declared by this route (not its ancestors)."""
        return MappingProxyType(self._attributes)

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the attribute *name*, declared here or by an ancestor."""
        attribute = self._attributes.get(name)
        if attribute is None and self._parent is not None:
            return self._parent.get_attribute(name)
        return attribute

    def get_methods(self) -> tuple[str, ...]:
        """Accepted methods: own, else the nearest ancestor's, else all."""
        if self._methods is not None:
            return self._methods
        if self._parent is not None:
            return self._parent.get_methods()
        return DEFAULT_METHODS

    @property
    def hosts(self) -> tuple[str, ...] | None:
        """Accepted hosts, or ``None`` for any. Never inherited."""
        return self._hosts

    def get_option(self, name: str, default: Any = None) -> Any:
        """Return option *name* from this route or its nearest ancestor."""
        if name in self.options:
            return self.options[name]
        if self._parent is not None:
            return self._parent.get_option(name, default)
        return default

    def set_context(self, context: Any) -> Route:
        self.context = context
        return self

    # -- Matching --

    def compile(self) -> re.Pattern[str]:
        """Return the case-insensitive pattern for the full path.

        Computed once and cached until the route is reparented.
        Placeholders become named groups constrained by the resolved
        attribute regex; optional segments become ``(?:...)?``.
        """
        if self._pattern is not None:
            return self._pattern

        path = self.get_path()
        groups: dict[str, str] = {}

        def render(nodes: list[TemplateNode]) -> str:
            parts: list[str] = []
            for node in nodes:
                if isinstance(node, str):
                    parts.append(re.escape(node))
                elif isinstance(node, Placeholder):
                    # Aliased group names: placeholders need not be identifiers
                    alias = f"a{len(groups)}"
                    groups[alias] = node.name
                    attribute = self.get_attribute(node.name)
                    regex = attribute.regex if attribute is not None else None
                    if regex is None:
                        regex = DEFAULT_ATTRIBUTE_REGEX
                    parts.append(f"(?P<{alias}>{regex})")
                else:
                    parts.append(f"(?:{render(node)})?")
            return "".join(parts)

        source = render(parse_template(path))
        try:
            pattern = re.compile(source, re.IGNORECASE)
        except re.error as exc:
            msg = f'Invalid pattern for route path "{path}": {exc}'
            raise RouteDefinitionError(msg) from exc

        self._groups = groups
        self._pattern = pattern
        return pattern

    def match(self, request: RoutableRequest) -> dict[str, str] | None:
        """Return the captured attributes if *request* matches, else ``None``."""
        if self.is_group():
            return None

        found = self.compile().fullmatch(request.path)
        if found is None:
            return None
        if request.method.upper() not in self.get_methods():
            return None
        if self._hosts is not None and request.host.lower() not in self._hosts:
            return None

        return {
            self._groups[alias]: value
            for alias, value in found.groupdict().items()
            if value is not None
        }

    def test(self, request: RoutableRequest, attributes: dict[str, Any] | None = None) -> bool:
        """Return True if this route accepts *request*.

        On success, *attributes* (when given) is replaced with the
        captured path attributes. Groups always return False.
        """
        captured = self.match(request)
        if captured is None:
            return False
        if attributes is not None:
            attributes.clear()
            attributes.update(captured)
        return True

    # -- Generation --

    def generate(self, parameters: Parameters | None = None) -> str:
        """Build a URL from *parameters*.

        Placeholders take the supplied value, else their default.
        Optional segments with an unresolved placeholder are dropped,
        innermost first: a segment wrapping a kept inner segment stays.
        Unused parameters become the query string.

        Raises ``MissingAttributes`` if a required placeholder has
        neither value nor default.
        """
        url, _ = self.generate_counted(parameters)
        return url

    def generate_counted(self, parameters: Parameters | None = None) -> tuple[str, int]:
        """Like ``generate``, also returning how many parameters the path consumed.

        Defaults do not count. The router uses this count to rank
        same-named routes.
        """
        remaining = {
            key: value for key, value in (parameters or {}).items() if value is not None
        }
        used = 0

        def render(nodes: list[TemplateNode]) -> tuple[str, list[str], bool]:
            """Return the text, the unresolved names, and whether a group survived."""
            nonlocal used
            parts: list[str] = []
            missing: list[str] = []
            kept_group = False
            for node in nodes:
                if isinstance(node, str):
                    parts.append(node)
                elif isinstance(node, Placeholder):
                    if node.name in remaining:
                        parts.append(stringify(remaining.pop(node.name)))
                        used += 1
                        continue
                    attribute = self.get_attribute(node.name)
                    if attribute is not None and attribute.has_default():
                        parts.append(stringify(attribute.default))
                    else:
                        missing.append(node.name)
                else:
                    text, group_missing, group_kept = render(node)
                    # Only a group with no surviving inner group can collapse
                    if group_missing and not group_kept:
                        continue
                    parts.append(text)
                    missing.extend(group_missing)
                    kept_group = True
            return "".join(parts), missing, kept_group

        url, missing, _ = render(parse_template(self.get_path()))
        if missing:
            raise MissingAttributes(tuple(dict.fromkeys(missing)), self.name)

        if remaining:
            query = build_query(remaining)
            if query:
                url = f"{url}?{query}"
        return url, used

    # -- Serialization --

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form of this route and its subtree.

        Back-references (parent, attribute owner) are not included;
        ``from_dict`` rebuilds them.
        """
        return {
            "path": self.path,
            "name": self.name,
            "methods": list(self._methods) if self._methods is not None else None,
            "hosts": list(self._hosts) if self._hosts is not None else None,
            "priority": self.priority,
            "attributes": [attribute.to_dict() for attribute in self._attributes.values()],
            "options": dict(self.options),
            "context": self.context,
            "routes": [route.to_dict() for route in self._routes],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Route:
        route = cls(
            data["path"],
            name=data.get("name"),
            methods=data.get("methods"),
            hosts=data.get("hosts"),
            priority=data.get("priority", -1),
            options=data.get("options"),
            context=data.get("context"),
        )
        route._attributes = {}
        for attribute_data in data.get("attributes", ()):
            attribute = Attribute.from_dict(attribute_data)
            attribute.set_route(route)
            route._attributes[attribute.name] = attribute
        route.add_route(*(cls.from_dict(child) for child in data.get("routes", ())))
        return route

    def __getstate__(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "methods": self._methods,
            "hosts": self._hosts,
            "priority": self.priority,
            "attributes": self._attributes,
            "options": self.options,
            "context": self.context,
            "routes": self._routes,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.path = state["path"]
        self.name = state["name"]
        self._methods = state["methods"]
        self._hosts = state["hosts"]
        self.priority = state["priority"]
        self._attributes = state["attributes"]
        self.options = state["options"]
        self.context = state["context"]
        self._routes = state["routes"]
        self._parent = None
        self._pattern = None
        self._groups = {}

        for route in self._routes:
            route.set_parent(self)
        for attribute in self._attributes.values():
            attribute.set_route(self)
