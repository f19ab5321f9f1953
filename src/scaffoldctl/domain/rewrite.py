"""Token rewriting: map a template's placeholder identifier onto a project name.

Rules are ordered most-specific first and the catch-all rule is always last;
its pattern is a substring of every structural pattern. All rules are joined
into one alternation and applied in a single scan: at any position the first
rule in order wins, and text produced by a rule is never rescanned, so a
target name that itself contains the placeholder cannot be rewritten twice.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from scaffoldctl.domain.names import collapse_name

DEFAULT_SERVICE_KEY = "spring.application.name"

_GROUP_REF = re.compile(r"\\(\d)")


@dataclass(frozen=True)
class SubstitutionRule:
    """One ``(pattern, replacement)`` step of the rewrite pipeline.

    The replacement is literal text except for ``\\1``-style references to
    the pattern's groups.
    """

    label: str
    pattern: re.Pattern[str]
    replacement: str

    def expand(self, match: re.Match[str], tidy: Callable[[str], str] | None = None) -> str:
        """Build the replacement for *match*, passing captured groups through *tidy*."""
        groups = [g or "" for g in match.groups()]
        if tidy is not None:
            groups = [tidy(g) for g in groups]
        return _GROUP_REF.sub(lambda ref: groups[int(ref.group(1)) - 1], self.replacement)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.expand, text)


def build_rules(
    placeholder: str,
    target: str,
    *,
    namespace: str | None = None,
    service_key: str = DEFAULT_SERVICE_KEY,
) -> list[SubstitutionRule]:
    """Build the ordered rule set for rewriting *placeholder* into *target*.

    Args:
        placeholder: Identifier baked into the template (e.g. ``sns-demo``).
        target: Validated project name.
        namespace: Dotted package namespace used by the template
            (e.g. ``com.xiaohongshu.sns.demo``). Its last segment is replaced
            with the collapsed target name.
        service_key: Config key whose value names the service.
    """
    p = re.escape(placeholder)
    rules: list[SubstitutionRule] = []

    if namespace:
        prefix, _, _segment = namespace.rpartition(".")
        collapsed = collapse_name(target)
        rules.append(
            SubstitutionRule(
                "namespace",
                re.compile(re.escape(namespace)),
                f"{prefix}.{collapsed}" if prefix else collapsed,
            )
        )

    rules += [
        SubstitutionRule(
            "artifact-parent",
            re.compile(rf"<artifactId>{p}-parent</artifactId>"),
            f"<artifactId>{target}-parent</artifactId>",
        ),
        SubstitutionRule(
            "artifact-suffix",
            re.compile(rf"<artifactId>{p}-([^<]+)</artifactId>"),
            f"<artifactId>{target}-\\1</artifactId>",
        ),
        SubstitutionRule(
            "artifact-exact",
            re.compile(rf"<artifactId>{p}</artifactId>"),
            f"<artifactId>{target}</artifactId>",
        ),
        SubstitutionRule(
            "name-exact",
            re.compile(rf"<name>{p}</name>"),
            f"<name>{target}</name>",
        ),
        SubstitutionRule(
            "name-suffix",
            re.compile(rf"<name>{p}-([^<]+)</name>"),
            f"<name>{target}-\\1</name>",
        ),
        SubstitutionRule(
            "module-suffix",
            re.compile(rf"<module>{p}-([^<]+)</module>"),
            f"<module>{target}-\\1</module>",
        ),
        SubstitutionRule(
            "artifact-property",
            re.compile(r"<artifactId>\$\{projectName\}-([^<]+)</artifactId>"),
            f"<artifactId>{target}-\\1</artifactId>",
        ),
    ]

    if service_key:
        key = re.escape(service_key)
        rules += [
            SubstitutionRule(
                "service-properties",
                re.compile(rf"{key}={p}"),
                f"{service_key}={target}",
            ),
            SubstitutionRule(
                "service-yaml",
                re.compile(rf"{key}:[ \t]*{p}"),
                f"{service_key}: {target}",
            ),
        ]

    rules.append(catch_all_rule(placeholder, target))
    return rules


def catch_all_rule(placeholder: str, target: str) -> SubstitutionRule:
    return SubstitutionRule("catch-all", re.compile(re.escape(placeholder)), target)


def apply_rules(text: str, rules: list[SubstitutionRule]) -> str:
    """Apply *rules* to *text* in one left-to-right scan.

    Groups captured by structural rules (module suffixes and the like) are
    passed through the last rule, the catch-all, so no placeholder survives
    inside them.
    """
    if not rules:
        return text
    catch_all = rules[-1]
    combined = re.compile(
        "|".join(f"(?P<r{i}>{rule.pattern.pattern})" for i, rule in enumerate(rules))
    )

    def _replace(match: re.Match[str]) -> str:
        key = next(k for k, v in match.groupdict().items() if v is not None)
        rule = rules[int(key[1:])]
        inner = rule.pattern.fullmatch(match.group(0))
        if inner is None:
            return match.group(0)
        return rule.expand(inner, catch_all.apply)

    return combined.sub(_replace, text)


def rewrite_content(
    content: str,
    placeholder: str,
    target: str,
    *,
    namespace: str | None = None,
    service_key: str = DEFAULT_SERVICE_KEY,
) -> str:
    """Rewrite file *content*, replacing the template placeholder with *target*.

    Content that contains neither the placeholder nor the namespace is
    returned unchanged.

    Examples:
        >>> rewrite_content("prefix-demo-suffix", "demo", "zoo")
        'prefix-zoo-suffix'
        >>> rewrite_content("<artifactId>demo-app</artifactId>", "demo", "zoo")
        '<artifactId>zoo-app</artifactId>'
    """
    if not placeholder:
        return content
    rules = build_rules(placeholder, target, namespace=namespace, service_key=service_key)
    return apply_rules(content, rules)


def rewrite_name(name: str, placeholder: str, target: str) -> str:
    """Rewrite a file or directory name. Only the catch-all rule applies."""
    if not placeholder:
        return name
    return catch_all_rule(placeholder, target).apply(name)
