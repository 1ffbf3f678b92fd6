"""Test the in-memory state providers."""

import unittest
from collections import OrderedDict

from undoredo.state_provider import DictStateProvider, MappingStateProvider, StateProvider


class TestDictStateProvider(unittest.TestCase):
    """Test DictStateProvider."""
    
    def setUp(self):
        self.store = DictStateProvider({"a": 1, "b": "two"})
    
    def test_get_existing_key(self):
        self.assertEqual(self.store.get("a"), 1)
    
    def test_get_missing_key_returns_default(self):
        self.assertIsNone(self.store.get("missing"))
        self.assertEqual(self.store.get("missing", 5), 5)
    
    def test_set_and_remove(self):
        self.store.set("c", [1, 2])
        self.assertEqual(self.store.get("c"), [1, 2])
        self.store.remove("c")
        self.assertNotIn("c", self.store)
    
    def test_remove_missing_key_is_noop(self):
        self.store.remove("missing")
        self.assertEqual(self.store.state, {"a": 1, "b": "two"})
    
    def test_none_is_a_present_value(self):
        self.store.set("a", None)
        self.assertIn("a", self.store)
        self.assertEqual(self.store.get_all({"a"}), {"a": None})
    
    def test_get_all_only_returns_present_keys(self):
        self.assertEqual(self.store.get_all({"a", "missing"}), {"a": 1})
    
    def test_get_typed(self):
        self.assertEqual(self.store.get_typed("a", int), 1)
        self.assertIsNone(self.store.get_typed("b", int))
        self.assertIsNone(self.store.get_typed("missing", int))
    
    def test_initial_mapping_is_copied(self):
        initial = {"a": 1}
        store = DictStateProvider(initial)
        store.set("a", 2)
        self.assertEqual(initial, {"a": 1})


class TestMappingStateProvider(unittest.TestCase):
    """Test adapting a plain mapping."""
    
    def test_writes_through_to_mapping(self):
        backing = OrderedDict()
        store = MappingStateProvider(backing)
        store.set("x", 1)
        self.assertEqual(backing, {"x": 1})
        store.remove("x")
        self.assertEqual(backing, {})
    
    def test_is_a_state_provider(self):
        self.assertIsInstance(MappingStateProvider({}), StateProvider)


class MinimalProvider(StateProvider):
    """Provider implementing only the abstract methods."""
    
    def __init__(self):
        self.data = {}
    
    def get(self, key, default=None):
        return self.data.get(key, default)
    
    def set(self, key, value):
        self.data[key] = value
    
    def remove(self, key):
        self.data.pop(key, None)
    
    def keys(self):
        return iter(list(self.data))


class TestStateProviderDefaults(unittest.TestCase):
    """Test the concrete helpers on the abstract base."""
    
    def test_get_all_uses_keys(self):
        provider = MinimalProvider()
        provider.set("a", 1)
        provider.set("b", None)
        self.assertEqual(provider.get_all(["a", "b", "c"]), {"a": 1, "b": None})
    
    def test_contains(self):
        provider = MinimalProvider()
        provider.set("a", 1)
        self.assertIn("a", provider)
        self.assertNotIn("b", provider)
    
    def test_cannot_instantiate_abstract_provider(self):
        with self.assertRaises(TypeError):
            StateProvider()


if __name__ == '__main__':
    unittest.main()
