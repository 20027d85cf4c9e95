import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional
from urllib.parse import quote, unquote, urlparse

from .errors import NetworkError
from .transport import USER_AGENT, http_get

logger = logging.getLogger(__name__)


def robots_url(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}/robots.txt"


def agent_token(user_agent: str) -> str:
    """Product token used for group matching: 'MetaFetcher/1.0 (+x)' -> 'metafetcher'."""
    head = user_agent.strip().split("/", 1)[0].split()
    return head[0].lower() if head else ""


# characters left as-is when re-encoding; '*' and '$' keep their pattern meaning
_PATH_SAFE = "/?=&*$:@!,;+~"


def normalize_path(path: str) -> str:
    """One canonical percent-encoding: '/caf%C3%A9', '/café' -> '/caf%C3%A9'; '/%7Ejoe' -> '/~joe'."""
    return quote(unquote(path), safe=_PATH_SAFE)


def _request_path(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return normalize_path(path)


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern:
    # '*' matches any run of characters, a trailing '$' pins the end of the path;
    # everything else is a plain prefix match
    anchored = pattern.endswith("$")
    if anchored:
        pattern = pattern[:-1]
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(regex + (r"\Z" if anchored else ""))


@dataclass(frozen=True)
class RobotsRule:
    allow: bool
    path: str

    def matches(self, path: str) -> bool:
        return _compile_pattern(self.path).match(path) is not None


@dataclass
class RobotsGroup:
    user_agents: list[str] = field(default_factory=list)
    rules: list[RobotsRule] = field(default_factory=list)


@dataclass
class RobotsPolicy:
    """Parsed robots.txt for a single host. Built fresh for every check, never shared."""

    groups: list[RobotsGroup] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "RobotsPolicy":
        policy = cls()
        current: Optional[RobotsGroup] = None
        # consecutive User-agent lines share one group
        collecting_agents = False

        for raw_line in text.lstrip("\ufeff").splitlines():
            line = raw_line.split("#", 1)[0].strip()
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            key = key.strip().lower()
            value = value.strip()

            if key == "user-agent":
                if current is None or not collecting_agents:
                    current = RobotsGroup()
                    policy.groups.append(current)
                current.user_agents.append(value if value == "*" else agent_token(value))
                collecting_agents = True
                continue
            collecting_agents = False

            # rules before any User-agent line belong to nobody;
            # an empty Disallow means "nothing is disallowed"
            if current is not None and key in ("allow", "disallow") and value:
                current.rules.append(RobotsRule(allow=(key == "allow"), path=normalize_path(value)))

        return policy

    def _groups_for(self, user_agent: str) -> list[RobotsGroup]:
        """Groups naming the client's token, else the '*' groups, else nothing."""
        token = agent_token(user_agent)
        exact = [g for g in self.groups if token and token in g.user_agents]
        if exact:
            return exact
        return [g for g in self.groups if "*" in g.user_agents]

    def rules_for(self, user_agent: str = USER_AGENT) -> list[RobotsRule]:
        return [rule for group in self._groups_for(user_agent) for rule in group.rules]

    def allowed(self, url: str, user_agent: str = USER_AGENT) -> bool:
        """
        Decide whether user_agent may fetch url (a full URL or a bare path).

        Longest matching pattern wins, Allow wins a tie, no match means allowed.
        """
        path = _request_path(url)
        if path == "/robots.txt":
            return True

        best: Optional[RobotsRule] = None
        for rule in self.rules_for(user_agent):
            if not rule.matches(path):
                continue
            if best is None or len(rule.path) > len(best.path):
                best = rule
            elif len(rule.path) == len(best.path) and rule.allow:
                best = rule
        return best is None or best.allow


def check_allowed(url: str, user_agent: str = USER_AGENT) -> bool:
    """
    Fetch the host's robots.txt and check url against it.
    An unreachable or non-2xx robots.txt means no restrictions.
    """
    location = robots_url(url)
    try:
        response = http_get(location)
    except NetworkError as exc:
        logger.info("robots.txt unreachable at %s, assuming allowed: %s", location, exc)
        return True

    if not 200 <= response.status_code < 300:
        logger.info("robots.txt at %s returned %d, assuming allowed", location, response.status_code)
        return True

    policy = RobotsPolicy.parse(response.text)
    return policy.allowed(url, user_agent)
