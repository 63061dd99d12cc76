# rank_spider/crawler/robots.py
"""
robots.txt rules and robots META directives.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

__all__ = ("RobotsTxtRules", "RobotsMeta", "parse_robots_meta")


@dataclass(slots=True)
class _Group:
    agents: List[str] = field(default_factory=list)
    rules: List[Tuple[bool, str]] = field(default_factory=list)
    crawl_delay: Optional[float] = None


class RobotsTxtRules:
    """
    robots.txt parsed per RFC 9309.

    The longest matching rule wins; on a tie Allow wins. An empty
    Disallow allows everything.
    """

    _WILDCARD_RE = re.compile(r"[*$]")

    def __init__(self, text: str) -> None:
        self._groups: List[_Group] = []
        self._patterns: Dict[str, re.Pattern[str]] = {}
        self._parse(text)

    @classmethod
    def allow_all(cls) -> RobotsTxtRules:
        return cls("")

    def can_fetch(self, user_agent: str, path: str) -> bool:
        group = self._match_group(user_agent)
        if group is None:
            return True
        best_len = -1
        allowed = True
        for allow, pattern in group.rules:
            if not self._match_path(path, pattern):
                continue
            length = len(self._WILDCARD_RE.sub("", pattern))
            if length > best_len or (length == best_len and allow):
                best_len = length
                allowed = allow
        return allowed

    def crawl_delay(self, user_agent: str) -> Optional[float]:
        group = self._match_group(user_agent)
        return None if group is None else group.crawl_delay

    def _parse(self, text: str) -> None:
        current: Optional[_Group] = None
        for raw in text.splitlines():
            line = raw.split("#", 1)[0].strip()
            if not line or ":" not in line:
                continue
            key, _, val = line.partition(":")
            key = key.strip().lower()
            val = val.strip()
            if key == "user-agent":
                # consecutive user-agent lines share one group
                if current is None or current.rules or current.crawl_delay is not None:
                    current = _Group()
                    self._groups.append(current)
                current.agents.append(val.lower())
                continue
            if current is None:
                current = _Group(agents=["*"])
                self._groups.append(current)
            if key == "allow" and val:
                current.rules.append((True, val))
            elif key == "disallow" and val:
                current.rules.append((False, val))
            elif key == "crawl-delay":
                try:
                    current.crawl_delay = float(val)
                except ValueError:
                    pass

    def _match_group(self, user_agent: str) -> Optional[_Group]:
        ua = user_agent.lower()
        for group in self._groups:
            if any(agent != "*" and ua.startswith(agent) for agent in group.agents):
                return group
        for group in self._groups:
            if "*" in group.agents:
                return group
        return None

    def _match_path(self, path: str, pattern: str) -> bool:
        regex = self._patterns.get(pattern)
        if regex is None:
            anchored = pattern.endswith("$")
            body = re.escape(pattern[:-1] if anchored else pattern).replace(r"\*", ".*")
            regex = re.compile(f"^{body}" + ("$" if anchored else ""))
            self._patterns[pattern] = regex
        return bool(regex.match(path))


@dataclass(slots=True, frozen=True)
class RobotsMeta:
    """Directives of a page's ``<meta name="robots">`` tags."""

    index: bool = True
    follow: bool = True


def parse_robots_meta(html: str, user_agent: str = "") -> RobotsMeta:
    """
    Collect ``noindex``/``nofollow``/``none`` from robots META tags.

    Tags named ``robots`` apply to everyone; tags named after the
    user-agent token apply to this crawler only.
    """
    soup = BeautifulSoup(html, "html.parser")
    token = user_agent.split("/", 1)[0].lower()
    index = follow = True
    for tag in soup.find_all("meta"):
        name = str(tag.get("name") or "").strip().lower()
        if name != "robots" and not (token and name == token):
            continue
        directives = {d.strip().lower() for d in str(tag.get("content") or "").split(",")}
        if "none" in directives:
            index = follow = False
        if "noindex" in directives:
            index = False
        if "nofollow" in directives:
            follow = False
    return RobotsMeta(index=index, follow=follow)
