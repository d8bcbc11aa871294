import pytest

from uffio.datasets.dataset15 import Dataset15
from uffio.datasets.dataset151 import Dataset151
from uffio.datasets.dataset164 import Dataset164
from uffio.units import convert_to_si, find_units, records_to_si


def _nodes() -> Dataset15:
    return Dataset15(
        node_labels=[1],
        def_cs=[0],
        disp_cs=[0],
        colors=[1],
        node_coords=[(1000.0, 2500.0, -500.0)],
    )


def test_node_coordinates_are_divided_by_length_factor():
    units = Dataset164(units_code=5, conversion_length=1000.0)
    nodes = _nodes()
    converted = convert_to_si(nodes, units)
    assert converted.node_coords == [(1.0, 2.5, -0.5)]
    # the input record is left untouched
    assert nodes.node_coords == [(1000.0, 2500.0, -500.0)]


def test_other_kinds_are_unchanged():
    header = Dataset151(model_name="m")
    assert convert_to_si(header, Dataset164()) is header


def test_zero_factor_is_rejected():
    with pytest.raises(ValueError):
        convert_to_si(_nodes(), Dataset164(conversion_length=0.0))


def test_records_to_si_uses_file_units():
    units = Dataset164(conversion_length=100.0)
    records = [Dataset151(), units, _nodes()]
    assert find_units(records) is units
    converted = records_to_si(records)
    assert converted[2].node_coords == [(10.0, 25.0, -5.0)]
    assert records_to_si([_nodes()])[0].node_coords == [(1000.0, 2500.0, -500.0)]


def test_explicit_length_factor_without_units_dataset():
    converted = convert_to_si(_nodes(), conversion_length=1000.0)
    assert converted.node_coords == [(1.0, 2.5, -0.5)]
    # an explicit factor wins over the units dataset
    override = convert_to_si(_nodes(), Dataset164(conversion_length=10.0), conversion_length=500.0)
    assert override.node_coords == [(2.0, 5.0, -1.0)]
    with pytest.raises(ValueError):
        convert_to_si(_nodes())
    with pytest.raises(ValueError):
        convert_to_si(_nodes(), conversion_length=0.0)
