"""Tests for the ordered token rewrite pipeline."""

from __future__ import annotations

from scaffoldctl.domain.rewrite import build_rules, rewrite_content, rewrite_name

NS = "com.xiaohongshu.sns.demo"


def _rw(content: str, target: str = "zoo", placeholder: str = "sns-demo") -> str:
    return rewrite_content(content, placeholder, target, namespace=NS)


class TestNoOp:
    def test_content_without_placeholder_unchanged(self) -> None:
        text = "<project>\n  <artifactId>other</artifactId>\n</project>\n"
        assert _rw(text) == text

    def test_name_without_placeholder_unchanged(self) -> None:
        assert rewrite_name("pom.xml", "sns-demo", "zoo") == "pom.xml"

    def test_empty_content(self) -> None:
        assert _rw("") == ""

    def test_empty_placeholder_is_noop(self) -> None:
        assert rewrite_content("demo", "", "zoo") == "demo"
        assert rewrite_name("demo", "", "zoo") == "demo"


class TestCatchAll:
    def test_replaces_inner_occurrence(self) -> None:
        result = rewrite_content("prefix-demo-suffix", "demo", "zoo")
        assert result == "prefix-zoo-suffix"
        assert "demo" not in result

    def test_replaces_every_occurrence(self) -> None:
        assert rewrite_content("demo demo demo", "demo", "zoo") == "zoo zoo zoo"

    def test_placeholder_with_regex_metacharacters(self) -> None:
        assert rewrite_content("a.b+c and axb+c", "a.b+c", "zoo") == "zoo and axb+c"


class TestStructuralPrecedence:
    def test_parent_artifact(self) -> None:
        assert (
            _rw("<artifactId>sns-demo-parent</artifactId>")
            == "<artifactId>zoo-parent</artifactId>"
        )

    def test_suffixed_artifact_with_short_placeholder(self) -> None:
        result = rewrite_content("<artifactId>demo-app</artifactId>", "demo", "zoo")
        assert result == "<artifactId>zoo-app</artifactId>"

    def test_suffixed_artifact_keeps_suffix(self) -> None:
        assert (
            _rw("<artifactId>sns-demo-infrastructure</artifactId>", target="order-svc")
            == "<artifactId>order-svc-infrastructure</artifactId>"
        )

    def test_exact_artifact_and_name(self) -> None:
        assert _rw("<artifactId>sns-demo</artifactId>") == "<artifactId>zoo</artifactId>"
        assert _rw("<name>sns-demo</name>") == "<name>zoo</name>"

    def test_suffixed_name_and_module(self) -> None:
        assert _rw("<name>sns-demo-start</name>") == "<name>zoo-start</name>"
        assert _rw("<module>sns-demo-common</module>") == "<module>zoo-common</module>"

    def test_project_name_property_artifact(self) -> None:
        assert (
            _rw("<artifactId>${projectName}-domain</artifactId>")
            == "<artifactId>zoo-domain</artifactId>"
        )


class TestNamespace:
    def test_namespace_uses_collapsed_name(self) -> None:
        result = _rw("package com.xiaohongshu.sns.demo.app;", target="my-shop")
        assert result == "package com.xiaohongshu.sns.myshop.app;"

    def test_namespace_rule_runs_first(self) -> None:
        rules = build_rules("sns-demo", "zoo", namespace=NS)
        assert rules[0].label == "namespace"
        assert rules[-1].label == "catch-all"

    def test_no_namespace_rule_without_namespace(self) -> None:
        rules = build_rules("sns-demo", "zoo")
        assert all(r.label != "namespace" for r in rules)


class TestServiceName:
    def test_properties_syntax(self) -> None:
        assert _rw("spring.application.name=sns-demo") == "spring.application.name=zoo"

    def test_yaml_syntax_normalizes_spacing(self) -> None:
        assert _rw("spring.application.name:   sns-demo") == "spring.application.name: zoo"

    def test_custom_service_key(self) -> None:
        result = rewrite_content("service=sns-demo", "sns-demo", "zoo", service_key="service")
        assert result == "service=zoo"


class TestRewriteName:
    def test_directory_name(self) -> None:
        assert rewrite_name("sns-demo-app", "sns-demo", "zoo") == "zoo-app"

    def test_only_catch_all_applies(self) -> None:
        """Names never get namespace treatment: hyphens are kept."""
        assert rewrite_name("sns-demo", "sns-demo", "my-shop") == "my-shop"


def test_full_descriptor() -> None:
    pom = (
        "<project>\n"
        "  <groupId>com.xiaohongshu.sns</groupId>\n"
        "  <artifactId>sns-demo-parent</artifactId>\n"
        "  <name>sns-demo</name>\n"
        "  <modules>\n"
        "    <module>sns-demo-app</module>\n"
        "  </modules>\n"
        "</project>\n"
    )
    result = _rw(pom, target="my-shop")
    assert "<artifactId>my-shop-parent</artifactId>" in result
    assert "<name>my-shop</name>" in result
    assert "<module>my-shop-app</module>" in result
    assert "sns-demo" not in result
    assert "my-shop-my-shop" not in result


class TestSinglePass:
    def test_target_containing_placeholder_not_rewritten_twice(self) -> None:
        result = _rw("<name>sns-demo</name> sns-demo", target="sns-demo2")
        assert result == "<name>sns-demo2</name> sns-demo2"

    def test_placeholder_inside_captured_suffix_is_rewritten(self) -> None:
        result = _rw("<module>sns-demo-sns-demo-x</module>")
        assert result == "<module>zoo-zoo-x</module>"

    def test_structural_and_catch_all_on_same_line(self) -> None:
        result = _rw("<artifactId>sns-demo-app</artifactId><!-- sns-demo -->")
        assert result == "<artifactId>zoo-app</artifactId><!-- zoo -->"
