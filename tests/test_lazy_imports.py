"""Tests for wren.__init__: lazy import registry covers all public names."""

import pytest

import wren


@pytest.mark.parametrize("name", wren.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(wren, name)
    assert obj is not None, f"wren.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        wren.__getattr__("ThisDoesNotExist")


def test_load_is_registry_load() -> None:
    from wren.registry import load

    assert wren.load is load
