import pytest

from campaign_flow.flow_builder import FlowBuilder


@pytest.fixture
def builder():
    return FlowBuilder()


def assert_simple_chain(state):
    """Every node sits on one directed path from the start to the tail."""
    in_degree = {node_id: 0 for node_id in state.nodes}
    out_degree = {node_id: 0 for node_id in state.nodes}
    for edge in state.edges.values():
        out_degree[edge.source] += 1
        in_degree[edge.target] += 1

    heads = [node_id for node_id, degree in in_degree.items() if degree == 0]
    ends = [node_id for node_id, degree in out_degree.items() if degree == 0]
    assert heads == [1]
    assert ends == [state.tail_node_id]
    for node_id in state.nodes:
        if node_id not in (1, state.tail_node_id):
            assert in_degree[node_id] == 1
            assert out_degree[node_id] == 1
