"""Testing utilities for soupstream consumers."""

from .fixtures import (
    EndlessTree,
    assert_released,
    build_tree,
    chain_tree,
    wide_tree,
)

__all__ = ['EndlessTree', 'assert_released', 'build_tree', 'chain_tree', 'wide_tree']
