"""Tests for the hierarchical (dependency layer) layout."""

import pytest

from conftest import make_relation, make_table
from erd_layout import LayoutOptions, Schema, hierarchical_layout
from erd_layout.hierarchical import assign_layers, build_dependency_maps


def layer_of(result, table_id):
    return result.get_node(table_id).layer


class TestDependencyMaps:
    """Test dependency graph construction."""

    def test_depends_on_and_reverse(self, blog_schema):
        """Test that relations become dependencies and their reverse."""
        depends_on, depended_on_by = build_dependency_maps(blog_schema)
        assert depends_on == {"users": set(), "posts": {"users"}, "comments": {"posts"}}
        assert depended_on_by == {"users": {"posts"}, "posts": {"comments"}, "comments": set()}

    def test_self_reference_ignored(self):
        """Test that a table never depends on itself."""
        schema = Schema(
            tables=[make_table("employees")],
            relations=[make_relation("employees", "employees", "manager_id")],
        )
        depends_on, _ = build_dependency_maps(schema)
        assert depends_on == {"employees": set()}

    def test_dangling_relation_skipped(self):
        """Test that relations to unknown tables are skipped."""
        schema = Schema(
            tables=[make_table("posts")],
            relations=[make_relation("posts", "ghost"), make_relation("ghost", "posts")],
        )
        depends_on, depended_on_by = build_dependency_maps(schema)
        assert depends_on == {"posts": set()}
        assert depended_on_by == {"posts": set()}


class TestAssignLayers:
    """Test layer assignment."""

    def test_chain(self, blog_schema):
        """Test users <- posts <- comments gives three layers."""
        depends_on, _ = build_dependency_maps(blog_schema)
        layers = assign_layers(blog_schema.tables, depends_on)
        assert [[t.id for t in layer] for layer in layers] == [["users"], ["posts"], ["comments"]]

    def test_layer_waits_for_all_dependencies(self):
        """Test that a table is placed after its deepest dependency."""
        schema = Schema(
            tables=[make_table("link"), make_table("a"), make_table("b")],
            relations=[make_relation("link", "a"), make_relation("link", "b"), make_relation("b", "a")],
        )
        depends_on, _ = build_dependency_maps(schema)
        layers = assign_layers(schema.tables, depends_on)
        assert [[t.id for t in layer] for layer in layers] == [["a"], ["b"], ["link"]]

    def test_pure_cycle_seeds_first_table(self, cycle_schema):
        """Test that a cycle with no roots seeds layer 0 with the first table."""
        depends_on, _ = build_dependency_maps(cycle_schema)
        layers = assign_layers(cycle_schema.tables, depends_on)
        assert [[t.id for t in layer] for layer in layers] == [["a"], ["b"]]

    def test_cycle_below_root_forces_progress(self):
        """Test that a cycle hanging off a root is broken in input order."""
        schema = Schema(
            tables=[make_table("root"), make_table("x"), make_table("y")],
            relations=[
                make_relation("x", "root"),
                make_relation("x", "y"),
                make_relation("y", "x"),
            ],
        )
        depends_on, _ = build_dependency_maps(schema)
        layers = assign_layers(schema.tables, depends_on)
        assert [[t.id for t in layer] for layer in layers] == [["root"], ["x"], ["y"]]

    def test_duplicate_ids_terminate(self):
        """Test that duplicate table IDs still place every table."""
        tables = [make_table("dup"), make_table("dup")]
        layers = assign_layers(tables, {"dup": set()})
        assert sum(len(layer) for layer in layers) == 2


class TestHierarchicalLayout:
    """Test node positioning."""

    def test_blog_scenario(self, blog_schema):
        """Test users/posts/comments land in layers 0/1/2."""
        result = hierarchical_layout(blog_schema, LayoutOptions())

        assert len(result.nodes) == 3
        assert len(result.edges) == 2
        assert layer_of(result, "users") == 0
        assert layer_of(result, "posts") == 1
        assert layer_of(result, "comments") == 2
        assert result.metadata.layer_count == 3

    def test_top_down_positions(self, blog_schema):
        """Test layers step down by node height + layer spacing."""
        result = hierarchical_layout(blog_schema, LayoutOptions())

        assert result.get_node("users").position.y == 0
        assert result.get_node("posts").position.y == 300
        assert result.get_node("comments").position.y == 600
        assert all(n.position.x == 0 for n in result.nodes)

    def test_narrow_layer_centered(self, star_schema):
        """Test that a single root is centered over the wider layer below."""
        result = hierarchical_layout(star_schema, LayoutOptions())

        # Layer 1 holds b, c, d: 3 * 350 - 100 = 950 wide; a is 250 wide
        a = result.get_node("a")
        assert a.position.x == pytest.approx(350)
        assert a.position.y == 0
        assert [result.get_node(t).position.x for t in ("b", "c", "d")] == [0, 350, 700]
        assert [result.get_node(t).rank for t in ("b", "c", "d")] == [0, 1, 2]

    def test_left_right(self, star_schema):
        """Test that horizontal layouts advance layers along x."""
        result = hierarchical_layout(star_schema, LayoutOptions(direction="left_right"))

        # Cross pitch is height + spacing = 250; layer 1 extent = 650
        a = result.get_node("a")
        assert a.position.x == 0
        assert a.position.y == pytest.approx(250)
        b = result.get_node("b")
        assert b.position.x == 400
        assert [result.get_node(t).position.y for t in ("b", "c", "d")] == [0, 250, 500]

    def test_bottom_up(self, blog_schema):
        """Test that bottom_up negates the main axis."""
        result = hierarchical_layout(blog_schema, LayoutOptions(direction="bottom_up"))

        assert result.get_node("users").position.y == 0
        assert result.get_node("posts").position.y == -300
        assert result.get_node("comments").position.y == -600

    def test_right_left(self, blog_schema):
        """Test that right_left negates x."""
        result = hierarchical_layout(blog_schema, LayoutOptions(direction="right_left"))

        assert result.get_node("posts").position.x == -400
        assert result.get_node("posts").position.y == 0

    def test_custom_spacing(self, blog_schema):
        """Test that spacing and node size feed the pitch."""
        options = LayoutOptions(
            spacing={"node_spacing": 10, "layer_spacing": 20},
            node_size={"width": 100, "height": 50},
        )
        result = hierarchical_layout(blog_schema, options)
        assert result.get_node("comments").position.y == 140
        assert result.get_node("comments").size.width == 100

    def test_cycle_scenario(self, cycle_schema):
        """Test that a two-table cycle yields layers 0 and 1 without error."""
        result = hierarchical_layout(cycle_schema, LayoutOptions())

        assert len(result.nodes) == 2
        assert len(result.edges) == 2
        assert sorted(n.layer for n in result.nodes) == [0, 1]

    def test_acyclic_relations_point_up(self, shop_schema):
        """Test that referenced tables sit in strictly earlier layers."""
        result = hierarchical_layout(shop_schema, LayoutOptions())
        ids = {t.id for t in shop_schema.tables}

        for relation in shop_schema.relations:
            if relation.is_self_reference:
                continue
            if relation.source_table not in ids or relation.target_table not in ids:
                continue
            assert layer_of(result, relation.target_table) < layer_of(result, relation.source_table)

    def test_self_reference_and_dangling(self, shop_schema):
        """Test that self-references and dangling relations keep tables at the root."""
        result = hierarchical_layout(shop_schema, LayoutOptions())

        assert layer_of(result, "categories") == 0
        assert layer_of(result, "audit_log") == 0
        assert len(result.edges) == len(shop_schema.relations)

    def test_empty(self, empty_schema):
        """Test that no tables gives an empty result with zero layers."""
        result = hierarchical_layout(empty_schema, LayoutOptions())

        assert result.nodes == []
        assert result.edges == []
        assert result.metadata.layer_count == 0
