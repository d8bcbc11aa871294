from uffio.codec import decode_all, encode_all
from uffio.datasets.dataset15 import Dataset15, parse_dataset15, write_dataset15
from uffio.scanner import Block

NODE_LINES = [
    "         1         0         0        11  0.00000E+00  0.00000E+00  0.00000E+00",
    "         2         0         0        11  1.00000E+01 -2.50000E+00  0.00000E+00",
]


def test_decode_nodes():
    block = Block(
        lines=["15"] + [line.strip() for line in NODE_LINES],
        raw_lines=["    15", *NODE_LINES],
    )
    nodes = parse_dataset15(block)
    assert nodes.node_labels == [1, 2]
    assert nodes.colors == [11, 11]
    assert nodes.node_coords[1] == (10.0, -2.5, 0.0)


def test_write_nodes_matches_fixed_columns():
    nodes = Dataset15(
        node_labels=[1, 2],
        def_cs=[0, 0],
        disp_cs=[0, 0],
        colors=[11, 11],
        node_coords=[(0.0, 0.0, 0.0), (10.0, -2.5, 0.0)],
    )
    assert write_dataset15(nodes) == NODE_LINES


def test_nodes_roundtrip():
    nodes = Dataset15(
        node_labels=[7],
        def_cs=[1],
        disp_cs=[2],
        colors=[3],
        node_coords=[(1.5, 2.25, -0.125)],
    )
    text = "\n".join(encode_all([nodes])) + "\n"
    assert decode_all(text.encode()).records == [nodes]
