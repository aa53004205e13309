"""Tests for the linear-probing hash table operations."""

import random
import string

from algotrace.algorithms import hash_table
from algotrace.algorithms.hash_table import char_sum_hash, djb2_hash
from algotrace.builders import new_hash_table, seed_hash_table


def _insert_all(table, pairs):
    for key, value in pairs:
        table = hash_table.insert(table, key, value).structure
    return table


class TestHashFunctions:
    def test_char_sum_hash(self):
        assert char_sum_hash("apple", 7) == 5
        assert char_sum_hash("banana", 7) == 0
        assert char_sum_hash("cherry", 7) == 2

    def test_djb2_single_char(self):
        assert djb2_hash("a", 7) == 3

    def test_djb2_long_key_stays_in_range(self):
        assert 0 <= djb2_hash("a" * 64, 7) < 7

    def test_compare_hashes_traces_both(self):
        result = hash_table.compare_hashes(new_hash_table(7), "a")
        assert result.value == (6, 3)
        assert result.trace.last.variables == {"key": "a", "char_sum": 6, "djb2": 3}


class TestInsert:
    def test_home_slot(self):
        result = hash_table.insert(new_hash_table(7), "apple", "red")
        assert result.structure.buckets[5].key == "apple"
        assert result.value == 0

    def test_collision_probes_next_slot(self):
        table = hash_table.insert(new_hash_table(7), "apple", "red").structure
        result = hash_table.insert(table, "elppa", "der")
        assert result.structure.buckets[6].key == "elppa"
        assert result.value == 1
        assert result.trace.last.variables["collisions"] == 1

    def test_probe_wraps_around(self):
        table = hash_table.insert(new_hash_table(7), "a", 1).structure
        result = hash_table.insert(table, "h", 2)
        assert result.structure.buckets[0].key == "h"

    def test_per_character_steps(self):
        result = hash_table.insert(new_hash_table(7), "ab", 1)
        sums = [s.variables["sum"] for s in result.trace if s.label.startswith("sum +=")]
        assert sums == [97, 195]

    def test_table_full(self):
        table = hash_table.insert(new_hash_table(1), "a", 1).structure
        result = hash_table.insert(table, "b", 2)
        assert not result.ok
        assert result.structure is table
        assert result.trace.last.label == "table full"

    def test_existing_key_is_updated_in_place(self):
        table = _insert_all(new_hash_table(7), [("apple", "red"), ("elppa", "x")])
        result = hash_table.insert(table, "elppa", "y")
        keys = [b.key for _, b in result.structure.occupied()]
        assert keys.count("elppa") == 1
        assert result.structure.buckets[6].value == "y"

    def test_caller_table_is_not_mutated(self):
        table = new_hash_table(7)
        hash_table.insert(table, "apple", "red")
        assert table.occupied() == []


class TestSearch:
    def test_seeded_keys_are_found(self):
        table = seed_hash_table()
        for key in ("apple", "banana", "cherry"):
            assert hash_table.search(table, key).value is not None

    def test_missing_key(self):
        result = hash_table.search(new_hash_table(7), "zzz")
        assert result.value is None
        assert result.trace.last.variables == {"key": "zzz", "found": False, "probes": 0}

    def test_random_inserts_keep_keys_unique_and_findable(self):
        rng = random.Random(11)
        table = new_hash_table(7)
        expected = {}
        for _ in range(30):
            key = "".join(rng.choice(string.ascii_lowercase[:4]) for _ in range(2))
            result = hash_table.insert(table, key, key.upper())
            probes = [s.variables.get("collisions", 0) for s in result.trace]
            assert max(probes) <= table.capacity
            if result.ok:
                expected[key] = key.upper()
            table = result.structure
            keys = [b.key for _, b in table.occupied()]
            assert len(keys) == len(set(keys))
        for key, value in expected.items():
            assert hash_table.search(table, key).value == value


class TestDelete:
    def test_delete_reseats_cluster(self):
        table = _insert_all(new_hash_table(7), [("a", 1), ("h", 2), ("o", 3)])
        result = hash_table.delete(table, "a")
        assert result.structure.buckets[6].key == "h"
        assert result.structure.buckets[0].key == "o"
        assert result.structure.buckets[1] is None
        assert hash_table.search(result.structure, "o").value == 3

    def test_delete_missing_key(self):
        table = seed_hash_table()
        result = hash_table.delete(table, "durian")
        assert not result.ok
        assert result.structure is table

    def test_delete_then_search(self):
        table = seed_hash_table()
        table = hash_table.delete(table, "banana").structure
        assert hash_table.search(table, "banana").value is None
        assert len(table.occupied()) == 2
