"""Tests for the graph model builder."""

from __future__ import annotations

from docgraph.builder import RELATED_TOPICS, build_graph_model, title_from_name
from docgraph.models import RELATED_WEIGHT, STRUCTURAL_WEIGHT, NodeKind, TreeEntry
from docgraph.tree import DEFAULT_TREE


def _page(name: str, path: str) -> TreeEntry:
    return TreeEntry(name=name, path=path, type="file")


def _section(name: str, path: str, *children: TreeEntry) -> TreeEntry:
    return TreeEntry(name=name, path=path, type="directory", children=list(children))


class TestTitles:
    def test_strips_markdown_extension(self):
        assert title_from_name("Quick Start.md") == "Quick Start"
        assert title_from_name("Guide.MDX") == "Guide"

    def test_leaves_directory_names_alone(self):
        assert title_from_name("API Reference") == "API Reference"


class TestStructure:
    def test_two_sections_without_related_match(self):
        tree = [
            _section("a", "a", _page("intro", "a/intro")),
            _section("b", "b", _page("Quick Start.md", "b/quick-start")),
        ]
        model = build_graph_model(tree, related_topics=[("installation", "quick-start")])

        assert len(model.nodes) == 4
        assert len(model.edges) == 2
        assert all(e.weight == STRUCTURAL_WEIGHT for e in model.edges)
        assert {(e.source, e.target) for e in model.edges} == {
            ("a", "a/intro"),
            ("b", "b/quick-start"),
        }

    def test_kinds_and_levels(self):
        tree = [_section("Docs", "docs", _section("Deep", "docs/deep", _page("X.md", "docs/deep/x")))]
        model = build_graph_model(tree)
        by_id = model.by_id()

        assert by_id["docs"].kind is NodeKind.group
        assert by_id["docs/deep/x"].kind is NodeKind.page
        assert [by_id[i].level for i in ("docs", "docs/deep", "docs/deep/x")] == [0, 1, 2]

    def test_ids_are_paths(self):
        model = build_graph_model(DEFAULT_TREE)
        assert all(n.id == n.path for n in model.nodes)
        assert len({n.id for n in model.nodes}) == len(model.nodes)

    def test_duplicate_paths_keep_first(self, caplog):
        tree = [_page("One.md", "dup"), _page("Two.md", "dup")]
        model = build_graph_model(tree)

        assert [n.title for n in model.nodes] == ["One"]
        assert "Duplicate tree path" in caplog.text

    def test_empty_tree(self):
        model = build_graph_model([])
        assert model.nodes == []
        assert model.edges == []


class TestSymmetry:
    def test_connections_are_symmetric(self):
        model = build_graph_model(DEFAULT_TREE)
        by_id = model.by_id()
        for edge in model.edges:
            assert edge.target in by_id[edge.source].connections
            assert edge.source in by_id[edge.target].connections

    def test_every_connection_has_an_edge(self):
        model = build_graph_model(DEFAULT_TREE)
        edge_keys = {k for e in model.edges for k in e.keys()}
        for node in model.nodes:
            for other in node.connections:
                assert f"{node.id}-{other}" in edge_keys


class TestRelatedTopics:
    def test_default_tree_counts(self):
        model = build_graph_model(DEFAULT_TREE)
        related = [e for e in model.edges if e.weight == RELATED_WEIGHT]

        assert len(model.nodes) == 28
        assert len(model.edges) - len(related) == 23
        assert len(related) == len(RELATED_TOPICS)

    def test_related_edge_links_both_ways(self):
        model = build_graph_model(DEFAULT_TREE)
        by_id = model.by_id()
        assert "getting-started/quick-start" in by_id["getting-started/installation"].connections
        assert "getting-started/installation" in by_id["getting-started/quick-start"].connections

    def test_first_path_match_wins(self):
        model = build_graph_model(DEFAULT_TREE)
        by_id = model.by_id()
        # "configuration" also matches developer-guides/ui-configuration.
        assert "user-guide/configuration" in by_id["user-guide/basic-usage"].connections
        assert "developer-guides/ui-configuration" not in by_id["user-guide/basic-usage"].connections

    def test_already_connected_pair_is_not_duplicated(self):
        tree = [_section("Installation", "installation", _page("Quick Start.md", "installation/quick-start"))]
        model = build_graph_model(tree, related_topics=[("installation", "quick-start")])
        assert len(model.edges) == 1
        assert model.edges[0].weight == STRUCTURAL_WEIGHT

    def test_pair_resolving_to_one_node_is_skipped(self):
        tree = [_page("Install.md", "installation-quick-start")]
        model = build_graph_model(tree, related_topics=[("installation", "quick-start")])
        assert model.edges == []
        assert model.nodes[0].connections == []


class TestDeterminism:
    def test_rebuild_is_identical(self):
        first = build_graph_model(DEFAULT_TREE, width=640, height=480)
        second = build_graph_model(DEFAULT_TREE, width=640, height=480)
        assert first.model_dump() == second.model_dump()

    def test_seed_position_is_viewport_centre(self):
        model = build_graph_model(DEFAULT_TREE, width=640, height=480)
        assert {(n.position.x, n.position.y) for n in model.nodes} == {(320.0, 240.0)}
