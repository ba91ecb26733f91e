"""Tests for pass-through execution controls."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FacetQuery.core.errors import InvalidOptionError, OptionShapeError
from FacetQuery.core.query import NativeParams
from FacetQuery.indices.purchases import purchase_compiler
from FacetQuery.indices.registry import compile_query


class TestNativeParams(unittest.TestCase):
    def test_paging_only(self) -> None:
        compiled = purchase_compiler.compile({"limit": 5, "offset": 10})
        self.assertTrue(compiled.clauses.is_empty())
        self.assertEqual(compiled.native, NativeParams(offset=10, limit=5))
        self.assertEqual(compiled.to_body(), {"query": {"bool": {}}, "from": 10, "size": 5})

    def test_absent_slots_are_not_rendered(self) -> None:
        body = purchase_compiler.body(seller=1)
        self.assertEqual(set(body), {"query"})

    def test_values_pass_through_untouched(self) -> None:
        aggs = {"price_cents_total": {"sum": {"field": "price_cents"}}}
        compiled = compile_query(
            "purchases",
            sort=[{"created_at": {"order": "desc"}}, "id"],
            source=False,
            aggs=aggs,
            track_total_hits=True,
        )
        body = compiled.to_body()
        self.assertEqual(body["sort"], [{"created_at": {"order": "desc"}}, "id"])
        self.assertIs(body["_source"], False)
        self.assertEqual(body["aggs"], aggs)
        self.assertIs(body["track_total_hits"], True)

    def test_caller_objects_are_copied(self) -> None:
        sort = [{"created_at": "desc"}]
        aggs = {"total": {"sum": {"field": "price_cents"}}}
        compiled = purchase_compiler.compile(sort=sort, aggs=aggs)

        sort.append("id")
        aggs["total"]["sum"]["field"] = "tax_cents"

        self.assertEqual(compiled.native.sort, [{"created_at": "desc"}])
        self.assertEqual(compiled.to_body()["aggs"], {"total": {"sum": {"field": "price_cents"}}})

    def test_rendered_body_does_not_share_native_values(self) -> None:
        compiled = purchase_compiler.compile(sort=[{"created_at": "desc"}], source=["id", "email"])
        body = compiled.to_body()
        body["sort"].append("mutated")
        body["_source"].clear()

        fresh = compiled.to_body()
        self.assertEqual(fresh["sort"], [{"created_at": "desc"}])
        self.assertEqual(fresh["_source"], ["id", "email"])
        self.assertEqual(compiled.native.sort, [{"created_at": "desc"}])

    def test_zero_offset_is_rendered(self) -> None:
        self.assertEqual(purchase_compiler.body(offset=0)["from"], 0)

    def test_negative_limit_rejected(self) -> None:
        with self.assertRaises(InvalidOptionError) as ctx:
            purchase_compiler.compile(limit=-1)
        self.assertEqual(ctx.exception.option, "limit")
        self.assertEqual(ctx.exception.family, "native")

    def test_non_integer_offset_rejected(self) -> None:
        with self.assertRaises(OptionShapeError):
            purchase_compiler.compile(offset="10")


class TestRegistry(unittest.TestCase):
    def test_collection_names_are_case_insensitive(self) -> None:
        compiled = compile_query(" Purchases ", {"seller": 1})
        self.assertEqual(compiled.collection, "purchases")

    def test_unknown_collection(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unsupported collection"):
            compile_query("refunds")


if __name__ == "__main__":
    unittest.main()
