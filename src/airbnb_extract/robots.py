from __future__ import annotations

import logging
from dataclasses import dataclass

from .http_client import FetchError, HttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RobotsRule:
    agent: str
    disallow: str

    def applies_to(self, agent_id: str) -> bool:
        # Plain containment, case-sensitive; an empty agent never matches.
        if self.agent == "*":
            return True
        return bool(self.agent) and self.agent in agent_id


class RobotsRules:
    """Very small robots.txt parser.

    Keeps only Disallow prefixes, in document order, tagged with the
    User-agent group they appear under. Consecutive User-agent lines share
    one group. Allow, Crawl-delay and unknown directives are ignored.
    Parsing never fails; unusable lines are skipped.
    """

    def __init__(self, rules: tuple[RobotsRule, ...] = ()) -> None:
        self.rules = rules

    @classmethod
    def parse(cls, raw_text: str) -> RobotsRules:
        rules: list[RobotsRule] = []
        group: list[str] = []
        in_agent_lines = False

        for line in raw_text.splitlines():
            if "#" in line:
                line = line.split("#", 1)[0]
            line = line.strip()
            if not line:
                continue

            key, sep, value = line.partition(":")
            if not sep:
                continue
            key = key.strip().lower()
            value = value.strip()

            if key == "user-agent":
                if not in_agent_lines:
                    group = []
                group.append(value)
                in_agent_lines = True
                continue

            in_agent_lines = False
            if key == "disallow" and value:
                rules.extend(RobotsRule(agent, value) for agent in group)

        return cls(tuple(rules))

    def __bool__(self) -> bool:
        return bool(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def is_allowed(self, path: str, agent_id: str) -> bool:
        for rule in self.rules:
            if rule.applies_to(agent_id) and path.startswith(rule.disallow):
                return False
        return True


class RobotsPolicy:
    """Process-wide robots.txt gate for one site.

    The rule set is fetched lazily on first use and kept for the lifetime of
    the object. Fetch failures fall back to an empty (permit-all) rule set.
    """

    def __init__(
        self,
        http: HttpClient,
        base_url: str,
        *,
        ignore_all: bool = False,
        timeout_s: float = 10,
    ) -> None:
        self._http = http
        self._robots_url = f"{base_url.rstrip('/')}/robots.txt"
        self._timeout_s = timeout_s
        self.ignore_all = ignore_all
        self._rules: RobotsRules | None = None

    @property
    def loaded(self) -> bool:
        return self.ignore_all or self._rules is not None

    @property
    def rules(self) -> RobotsRules:
        return self._rules if self._rules is not None else RobotsRules()

    def load(self) -> None:
        if self.ignore_all:
            return

        try:
            res = self._http.get(self._robots_url, timeout_s=self._timeout_s)
        except FetchError as e:
            logger.warning("Could not fetch %s: %s", self._robots_url, e)
            self._rules = RobotsRules()
            return

        if not res.ok:
            logger.warning(
                "Could not fetch %s: HTTP %s", self._robots_url, res.status_code
            )
            self._rules = RobotsRules()
            return

        self._rules = RobotsRules.parse(res.text)
        logger.debug("Loaded %d robots.txt rules", len(self._rules))

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.load()

    def is_allowed(self, path: str, agent_id: str) -> bool:
        if self.ignore_all or self._rules is None:
            return True
        return self._rules.is_allowed(path, agent_id)
