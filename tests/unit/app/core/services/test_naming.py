"""Unit tests for the generated-name convention."""

from src.app.core.services.naming import generated_name_prefix
from src.app.core.services.projector import generate_deployable_for_channel
from tests.fixtures import make_channel, make_deployable


def test_prefix_from_name():
    assert generated_name_prefix(make_deployable("R")) == "R-"


def test_prefix_from_generate_name():
    """A deployable created from a generate-name extends that prefix."""
    dpl = make_deployable("R-x7k2p", generate_name="R-")
    assert generated_name_prefix(dpl) == "R--"


def test_empty_generate_name_falls_back_to_name():
    assert generated_name_prefix(make_deployable("R", generate_name="")) == "R-"


def test_prefix_is_stable_and_used_by_projection():
    dpl = make_deployable("R")
    projection = generate_deployable_for_channel(dpl, make_channel())

    assert generated_name_prefix(dpl) == generated_name_prefix(dpl)
    assert projection is not None
    assert projection.generate_name == generated_name_prefix(dpl)
