"""Tests for graph/resolver.py - import specifier resolution."""

import pytest

from workflow_graph.graph.models import WorkflowNode
from workflow_graph.graph.resolver import (
    ImportResolver,
    ResolutionStrategy,
    filename_variants,
    join_relative,
    run_strategy,
)
from workflow_graph.semantics import Importance, NodeType


def make_node(path: str) -> WorkflowNode:
    """Helper to create a bare node for resolution tests."""
    return WorkflowNode(
        id=path,
        name=path.rsplit("/", 1)[-1],
        path=path,
        extension="." + path.rsplit(".", 1)[-1],
        type=NodeType.COMPONENT,
        role="Mixed Module",
        importance=Importance.LOW,
    )


@pytest.fixture
def nodes():
    return [
        make_node("src/index.ts"),
        make_node("src/App.tsx"),
        make_node("src/lib/api.ts"),
        make_node("src/components/Button.tsx"),
    ]


@pytest.fixture
def resolver(nodes):
    return ImportResolver(nodes)


class TestJoinRelative:
    def test_sibling(self):
        assert join_relative("./App", "src/index.ts") == "src/App"

    def test_parent(self):
        assert join_relative("../lib/api.ts", "src/components/Button.tsx") == "src/lib/api.ts"

    def test_above_root_is_dropped(self):
        assert join_relative("../../x.ts", "a/b.ts") == "x.ts"


class TestFilenameVariants:
    def test_variants_in_order(self):
        variants = filename_variants("./components/Button")
        assert variants[:3] == ["Button", "Button.ts", "Button.tsx"]
        assert "Button/index.ts" in variants

    def test_empty(self):
        assert filename_variants("") == []


class TestStrategyPriority:
    def test_direct(self, resolver):
        assert resolver.resolve_with_strategy("src/App.tsx", "src/index.ts") == (
            "src/App.tsx",
            ResolutionStrategy.DIRECT,
        )

    def test_relative(self, resolver):
        assert resolver.resolve_with_strategy("./App.tsx", "src/index.ts") == (
            "src/App.tsx",
            ResolutionStrategy.RELATIVE,
        )

    def test_relative_parent(self, resolver):
        target = resolver.resolve("../lib/api.ts", "src/components/Button.tsx")
        assert target == "src/lib/api.ts"

    def test_extensionless_relative(self, resolver):
        assert resolver.resolve_with_strategy("./App", "src/index.ts") == (
            "src/App.tsx",
            ResolutionStrategy.RELATIVE,
        )

    def test_relative_directory_import_uses_index_file(self):
        resolver = ImportResolver([make_node("src/main.ts"), make_node("src/lib/index.ts")])
        assert resolver.resolve_with_strategy("./lib", "src/main.ts") == (
            "src/lib/index.ts",
            ResolutionStrategy.RELATIVE,
        )

    def test_relative_prefers_importer_directory_over_first_match(self):
        resolver = ImportResolver(
            [make_node("lib/utils.ts"), make_node("src/a/x.ts"), make_node("src/a/utils.ts")]
        )
        assert resolver.resolve("./utils", "src/a/x.ts") == "src/a/utils.ts"

    def test_missed_relative_falls_back_to_filename_variant(self, resolver):
        assert resolver.resolve_with_strategy("./widgets/Button", "src/index.ts") == (
            "src/components/Button.tsx",
            ResolutionStrategy.FILENAME_VARIANT,
        )

    def test_partial(self, resolver):
        assert resolver.resolve_with_strategy("components", "src/index.ts") == (
            "src/components/Button.tsx",
            ResolutionStrategy.PARTIAL,
        )

    def test_scoped_alias(self, resolver):
        assert resolver.resolve_with_strategy("@/lib", "src/index.ts") == (
            "src/lib/api.ts",
            ResolutionStrategy.SCOPED_ALIAS,
        )

    def test_unresolved(self, resolver):
        assert resolver.resolve_with_strategy("react", "src/index.ts") == (None, None)

    def test_blank_specifier(self, resolver):
        assert resolver.resolve("   ", "src/index.ts") is None

    def test_ties_go_to_first_inserted(self):
        resolver = ImportResolver([make_node("a/util.ts"), make_node("b/util.ts")])
        assert resolver.resolve("util", "c/main.ts") == "a/util.ts"


class TestRunStrategy:
    def test_scoped_alias_in_isolation(self, nodes):
        assert (
            run_strategy(ResolutionStrategy.SCOPED_ALIAS, "@/lib/api", "src/index.ts", nodes)
            == "src/lib/api.ts"
        )

    def test_custom_alias(self, nodes):
        target = run_strategy(
            ResolutionStrategy.SCOPED_ALIAS,
            "~/components/Button",
            "src/index.ts",
            nodes,
            alias_prefixes={"~/": "src/"},
        )
        assert target == "src/components/Button.tsx"

    def test_relative_ignores_bare_specifiers(self, nodes):
        assert run_strategy(ResolutionStrategy.RELATIVE, "App", "src/index.ts", nodes) is None

    def test_direct_requires_exact_id(self, nodes):
        assert run_strategy(ResolutionStrategy.DIRECT, "src/App", "src/index.ts", nodes) is None


class TestUnresolvableImport:
    def test_missing_alias_target_is_none(self):
        nodes = [make_node("src/index.ts"), make_node("src/App.tsx"), make_node("src/Header.tsx")]
        resolver = ImportResolver(nodes)
        assert resolver.resolve("@/lib/missing", "src/index.ts") is None
        assert resolver.resolve("./App", "src/index.ts") == "src/App.tsx"
