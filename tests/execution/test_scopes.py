"""
Tests for scope visibility.

Focus Areas:
1. Visibility order for nodes at every depth of the sample tree
2. Opacity of sibling containers and the simulation boundary
3. Visibility follows tree mutations
"""

from simtree import Simulation, Zone
from simtree.execution.queries import descendants
from simtree.execution.scopes import scope_frames, scope_visible
from tests.sample_tree import Clock, names


class TestScopeFrames:
    """Test the scope chain walked for a node."""

    def test_component_starts_at_parent(self, tree):
        assert names(list(scope_frames(tree.graph))) == ["Field2", "Test"]

    def test_zone_starts_at_itself(self, tree):
        assert names(list(scope_frames(tree.field2))) == ["Field2", "Test"]

    def test_simulation_is_last_frame(self, tree):
        assert names(list(scope_frames(tree.simulation))) == ["Test"]

    def test_outside_simulations_reaches_root(self, tree):
        assert names(list(scope_frames(tree.data_store))) == ["Simulations"]

    def test_root_has_no_frames(self, tree):
        assert list(scope_frames(tree.root)) == []


class TestScopeVisible:
    """Test the ordered visibility set."""

    def test_component_in_zone(self, tree):
        assert names(scope_visible(tree.graph)) == [
            "Graph1",
            "Soil",
            "Field2SubZone",
            "Field2",
            "WeatherFile",
            "Clock",
            "Summary",
            "Field1",
            "Test",
        ]

    def test_nested_component(self, tree):
        """A node below a non-boundary parent sees that parent's children first."""
        assert names(scope_visible(tree.water)) == [
            "Water",
            "Soil",
            "Graph1",
            "Field2SubZone",
            "Field2",
            "WeatherFile",
            "Clock",
            "Summary",
            "Field1",
            "Test",
        ]

    def test_zone_sees_its_own_children(self, tree):
        """A zone resolves names of its own components."""
        assert names(scope_visible(tree.field1)) == [
            "Field1Report",
            "Field1",
            "WeatherFile",
            "Clock",
            "Summary",
            "Field2",
            "Test",
        ]
        assert names(scope_visible(tree.field2)) == names(scope_visible(tree.graph))

    def test_simulation(self, tree):
        """Nothing outside the simulation is visible, even from the simulation."""
        assert names(scope_visible(tree.simulation)) == [
            "WeatherFile",
            "Clock",
            "Summary",
            "Field1",
            "Field2",
            "Test",
        ]

    def test_node_outside_simulation(self, tree):
        assert names(scope_visible(tree.data_store)) == [
            "Test",
            "DataStore",
            "Simulations",
        ]

    def test_root_sees_nothing(self, tree):
        assert scope_visible(tree.root) == []

    def test_kind_filter_keeps_order(self, tree):
        assert names(scope_visible(tree.graph, Zone)) == [
            "Field2SubZone",
            "Field2",
            "Field1",
            "Test",
        ]
        assert names(scope_visible(tree.graph, "Simulation")) == ["Test"]
        assert scope_visible(tree.graph, Simulation) == [tree.simulation]

    def test_no_duplicates(self, tree):
        for node in tree.all_nodes():
            visible = scope_visible(node)
            assert len(visible) == len(set(visible)), node.name

    def test_visible_nodes_share_root(self, tree):
        for node in tree.all_nodes():
            for member in scope_visible(node):
                assert member.root is node.root


class TestOpacity:
    """Test that container interiors stay hidden from outside."""

    def test_other_zone_interior_hidden(self, tree):
        visible = scope_visible(tree.graph)

        assert tree.field1_report not in visible
        assert tree.sub_zone_report not in visible
        assert tree.water not in visible

    def test_sibling_zone_visible_by_name_only(self, tree):
        """A sibling zone is visible; its descendants are not."""
        visible = scope_visible(tree.field1)

        assert tree.field2 in visible
        for hidden in descendants(tree.field2):
            assert hidden not in visible

    def test_visibility_is_narrower_than_scope_closure(self, tree):
        """Expanding every frame fully would expose nested components."""
        closure = {
            member
            for frame in scope_frames(tree.graph)
            for member in (frame, *descendants(frame))
        }

        assert set(scope_visible(tree.graph)) < closure
        assert tree.field1_report in closure


class TestLiveRecompute:
    """Test that visibility always reflects the current tree."""

    def test_added_node_becomes_visible(self, tree):
        met = tree.simulation.add_child(Clock(name="Met"))

        assert met in scope_visible(tree.graph)

    def test_removed_node_disappears(self, tree):
        tree.simulation.remove_child(tree.clock)

        assert tree.clock not in scope_visible(tree.graph)

    def test_moved_node_changes_scope(self, tree):
        tree.graph.detach()
        tree.field1.add_child(tree.graph)

        assert tree.field1_report in scope_visible(tree.graph)
        assert tree.soil not in scope_visible(tree.graph)
